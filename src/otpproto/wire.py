#!/usr/bin/env python

"""Length-prefixed framing for the OTP cipher protocol.

Each frame is a 4-byte signed length in network (big-endian) byte order
followed by that many payload bytes::

    +--------+--------+--------+--------+------------------ ... --+
    |        length (>i, big-endian)    |  payload (length bytes) |
    +--------+--------+--------+--------+------------------ ... --+

Payloads are opaque at this layer.  Writes are split into chunks of at most
``chunk_size`` bytes and reads loop until the announced length has been
assembled, so short reads and writes on the socket are invisible to callers.
"""

import struct

from .errors import ConnectionClosed, FrameTooLarge, ProtocolError, \
    TransportError

CHUNK_SIZE = 1000
MAX_FRAME_SIZE = 16 * 1024 * 1024
LENGTH_STRUCT = struct.Struct('>i')


class FrameCodec:
    """Sends and receives length-prefixed frames over a connected socket.

    Parameters
    ----------
    chunk_size : int
        Largest single ``send``/``recv`` issued on the socket.
    max_frame_size : int
        Largest announced length accepted from a peer.  Anything bigger
        raises :class:`FrameTooLarge` before a buffer is allocated.
    """

    def __init__(self, chunk_size=CHUNK_SIZE, max_frame_size=MAX_FRAME_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive, got %d"
                             % chunk_size)
        if not 0 <= max_frame_size <= 2 ** 31 - 1:
            raise ValueError("max_frame_size must fit the length field, "
                             "got %d" % max_frame_size)
        self.chunk_size = chunk_size
        self.max_frame_size = max_frame_size

    def encode_length(self, length):
        """Encode a payload length as the 4-byte frame header."""
        if not 0 <= length <= self.max_frame_size:
            raise FrameTooLarge(length, self.max_frame_size)
        return LENGTH_STRUCT.pack(length)

    def decode_length(self, data):
        """Decode and check a 4-byte frame header.

        Raises
        ------
        ProtocolError
            If the announced length is negative.
        FrameTooLarge
            If the announced length exceeds ``max_frame_size``.
        """
        length = LENGTH_STRUCT.unpack(data)[0]
        if length < 0:
            raise ProtocolError("Negative frame length: %d" % length)
        if length > self.max_frame_size:
            raise FrameTooLarge(length, self.max_frame_size)
        return length

    def send_all(self, sock, data):
        """Write every byte of ``data``, at most ``chunk_size`` per call."""
        view = memoryview(data)
        sent = 0
        while sent < len(view):
            end = min(sent + self.chunk_size, len(view))
            try:
                n = sock.send(view[sent:end])
            except OSError as e:
                raise TransportError("Unable to write to socket: %s" % e) \
                    from e
            sent += n

    def recv_exact(self, sock, n):
        """Read exactly ``n`` bytes into a buffer allocated up front."""
        buf = bytearray(n)
        view = memoryview(buf)
        received = 0
        while received < n:
            size = min(n - received, self.chunk_size)
            try:
                count = sock.recv_into(view[received:], size)
            except OSError as e:
                raise TransportError("Unable to read from socket: %s" % e) \
                    from e
            if count == 0:
                raise ConnectionClosed(
                    "Peer closed connection after %d of %d bytes"
                    % (received, n))
            received += count
        return bytes(buf)

    def send_frame(self, sock, payload):
        """Send one frame carrying ``payload`` (bytes-like)."""
        payload = memoryview(payload).cast('B')
        self.send_all(sock, self.encode_length(len(payload)))
        self.send_all(sock, payload)

    def receive_frame(self, sock):
        """Receive one frame and return its payload as ``bytes``."""
        length = self.decode_length(self.recv_exact(sock, LENGTH_STRUCT.size))
        return self.recv_exact(sock, length)

    @property
    def header_size(self):
        """Size of the length header in bytes."""
        return LENGTH_STRUCT.size


_default_codec = FrameCodec()


def send_frame(sock, payload):
    """Send ``payload`` using the default codec."""
    _default_codec.send_frame(sock, payload)


def receive_frame(sock):
    """Receive one payload using the default codec."""
    return _default_codec.receive_frame(sock)
