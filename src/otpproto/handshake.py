#!/usr/bin/env python

"""Role tag exchange performed at the start of every connection.

The client sends its tag first and expects the server to answer with the
same tag; the server reads the client's tag, answers with its own and
compares.  A client for one half of the cipher pointed at a server for the
other half is therefore rejected on both ends before any text is sent.

This is a capability check between matching programs, not authentication.
"""

import logging

from . import cipher
from .errors import RoleMismatch
from .wire import FrameCodec

logger = logging.getLogger(__name__)

TAG_SIZE = 4


class Role:
    """One half of the cipher pair: a handshake tag and a pad direction."""

    def __init__(self, tag, direction, description):
        if len(tag) >= TAG_SIZE:
            raise ValueError("tag must be shorter than %d characters"
                             % TAG_SIZE)
        self.tag = tag
        self.direction = direction
        self.description = description

    @property
    def wire_tag(self):
        """The tag as sent on the wire, NUL-padded to ``TAG_SIZE``."""
        return self.tag.encode('ascii').ljust(TAG_SIZE, b'\0')

    def __repr__(self):
        return 'Role(%r)' % self.tag


ENCRYPT = Role('enc', cipher.ENCRYPT, 'encryption')
DECRYPT = Role('dec', cipher.DECRYPT, 'decryption')

ROLES = {role.tag: role for role in (ENCRYPT, DECRYPT)}


def parse_tag(data):
    """Return the tag carried in a received buffer, up to the first NUL."""
    return data.split(b'\0', 1)[0].decode('ascii', errors='replace')


def _fail(sock, role, received):
    sock.close()
    raise RoleMismatch(role.tag, received)


def client_handshake(sock, role, codec=None):
    """Announce ``role`` and check the server echoes the same tag."""
    codec = codec or FrameCodec()
    codec.send_all(sock, role.wire_tag)
    received = parse_tag(codec.recv_exact(sock, TAG_SIZE))
    if received != role.tag:
        _fail(sock, role, received)
    logger.debug("Handshake as %r accepted by server", role.tag)


def server_handshake(sock, role, codec=None):
    """Read the client's tag, answer with ``role``'s tag and compare."""
    codec = codec or FrameCodec()
    received = parse_tag(codec.recv_exact(sock, TAG_SIZE))
    codec.send_all(sock, role.wire_tag)
    if received != role.tag:
        _fail(sock, role, received)
    logger.debug("Handshake from %r client accepted", received)
