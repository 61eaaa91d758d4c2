#!/usr/bin/env python

"""Server side of a single cipher connection.

A session runs exactly one transfer::

    accepted -> handshaking -> transferring -> closed

In ``transferring`` the text frame is received, then the key frame, and one
result frame is sent back.  Any error moves the session straight to
``closed`` with the exception recorded in ``failure``.  The socket is closed
on every path.
"""

import logging

from . import cipher
from .errors import ProtocolError
from .handshake import server_handshake
from .wire import FrameCodec

logger = logging.getLogger(__name__)

ACCEPTED = 'accepted'
HANDSHAKING = 'handshaking'
TRANSFERRING = 'transferring'
CLOSED = 'closed'


class Session:
    """One accepted connection served under ``role``.

    Parameters
    ----------
    sock : socket.socket
        Connected socket; owned by the session from now on.
    role : otpproto.handshake.Role
        Which half of the pair this server implements.
    codec : FrameCodec, optional
        Framing parameters; a default codec is used if omitted.
    """

    def __init__(self, sock, role, codec=None):
        self.sock = sock
        self.role = role
        self.codec = codec or FrameCodec()
        self.phase = ACCEPTED
        self.failure = None
        self.failed_phase = None

    def run(self):
        """Serve the connection and return the result payload sent."""
        try:
            self.phase = HANDSHAKING
            server_handshake(self.sock, self.role, self.codec)

            self.phase = TRANSFERRING
            text = self.codec.receive_frame(self.sock)
            key = self.codec.receive_frame(self.sock)
            if len(key) < len(text):
                raise ProtocolError("Key frame shorter than text frame "
                                    "(%d < %d)" % (len(key), len(text)))

            result = cipher.transform(text, key, self.role.direction)
            self.codec.send_frame(self.sock, result)
            logger.debug("Sent %d byte %s result", len(result),
                         self.role.description)
            return result
        except Exception as e:
            self.failure = e
            self.failed_phase = self.phase
            raise
        finally:
            self.sock.close()
            self.phase = CLOSED

    @property
    def failed(self):
        return self.failure is not None
