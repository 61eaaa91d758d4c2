#!/usr/bin/env python

"""Network links for the OTP cipher: a threaded server and a one-shot client.

Example: serve encryption requests until interrupted

>>> server = CipherServer(('0.0.0.0', 8888), handshake.ENCRYPT)
>>> server.serve_forever()

Example: encrypt one message against that server

>>> client = CipherClient(resolve_address('localhost', 8888),
...                       handshake.ENCRYPT)
>>> ciphertext = client.transform('HELLO WORLD', key)
"""

import logging
import socket
import socketserver

from . import handshake
from .errors import AddressError, KeyTooShort, OTPError, ProtocolError, \
    TransportError
from .session import Session
from .wire import FrameCodec

logger = logging.getLogger(__name__)

DEFAULT_HOST = 'localhost'
DEFAULT_LISTEN_ADDRESS = '0.0.0.0'
REQUEST_QUEUE_SIZE = 5


def resolve_address(host, port):
    """Resolve ``host`` to an IPv4 ``(address, port)`` tuple."""
    try:
        infos = socket.getaddrinfo(host, port, socket.AF_INET,
                                   socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise AddressError("No such host %r: %s" % (host, e)) from e
    if not infos:
        raise AddressError("No such host %r" % host)
    return infos[0][4]


class CipherRequestHandler(socketserver.BaseRequestHandler):
    """Runs one :class:`Session` on the thread the server gave it."""

    def setup(self):
        if self.server.session_timeout is not None:
            self.request.settimeout(self.server.session_timeout)

    def handle(self):
        session = Session(self.request, self.server.role, self.server.codec)
        logger.debug("Accepted %s client %s:%d", self.server.role.tag,
                     *self.client_address[:2])
        try:
            session.run()
        except OTPError as e:
            logger.warning("Session with %s:%d failed while %s: %s",
                           self.client_address[0], self.client_address[1],
                           session.failed_phase, e)
        else:
            logger.debug("Session with %s:%d complete",
                         *self.client_address[:2])


class CipherServer(socketserver.ThreadingTCPServer):
    """Threaded TCP server for one half of the cipher pair.

    Every accepted connection is handed to its own daemon thread, so the
    accept loop never blocks on a client.  Sessions share no state.

    Parameters
    ----------
    address : tuple
        (host, port) to bind to.  Port 0 picks a free port.
    role : otpproto.handshake.Role
        ``handshake.ENCRYPT`` or ``handshake.DECRYPT``.
    timeout : float, optional
        Per-connection socket timeout in seconds.  ``None`` waits forever.
    codec : FrameCodec, optional
        Framing parameters.
    """

    allow_reuse_address = True
    daemon_threads = True
    request_queue_size = REQUEST_QUEUE_SIZE

    def __init__(self, address, role, timeout=None, codec=None):
        self.role = role
        self.session_timeout = timeout
        self.codec = codec or FrameCodec()
        try:
            super().__init__(address, CipherRequestHandler)
        except OSError as e:
            raise TransportError("Unable to bind %s:%d: %s"
                                 % (address[0], address[1], e)) from e
        logger.info("%s server listening on %s:%d",
                    role.description.capitalize(), *self.server_address[:2])

    @property
    def port(self):
        return self.server_address[1]

    def get_request(self):
        # socketserver quietly drops accept() failures; a broken listening
        # socket must stop the server instead.
        try:
            return super().get_request()
        except OSError as e:
            raise TransportError("Unable to accept connection: %s" % e) \
                from e

    def handle_error(self, request, client_address):
        logger.exception("Unexpected error serving %s", client_address)

    def close(self):
        """Stop the server and release the listening socket."""
        self.server_close()
        logger.info("%s server closed", self.role.description.capitalize())


class CipherClient:
    """A client for one half of the cipher pair.

    Each call to :meth:`transform` opens a fresh connection and carries
    exactly one transfer over it.

    Parameters
    ----------
    address : tuple
        Resolved (host, port) of the server.
    role : otpproto.handshake.Role
        Must match the server's role or the handshake fails.
    timeout : float, optional
        Socket timeout in seconds for connect, send and receive.
    codec : FrameCodec, optional
        Framing parameters.
    """

    def __init__(self, address, role, timeout=None, codec=None):
        self.address = address
        self.role = role
        self.timeout = timeout
        self.codec = codec or FrameCodec()

    def _connect(self):
        try:
            return socket.create_connection(self.address,
                                            timeout=self.timeout)
        except OSError as e:
            raise TransportError("Unable to connect to %s:%d: %s"
                                 % (self.address[0], self.address[1], e)) \
                from e

    def transform(self, text, key):
        """Send ``text`` and ``key`` to the server and return its result.

        Raises
        ------
        KeyTooShort
            Before connecting, if ``key`` is shorter than ``text``.
        RoleMismatch
            If the server belongs to the other half of the pair.
        ProtocolError
            If the result is not exactly as long as ``text``.
        """
        if len(key) < len(text):
            raise KeyTooShort(len(text), len(key))

        sock = self._connect()
        try:
            handshake.client_handshake(sock, self.role, self.codec)
            self.codec.send_frame(sock, text.encode('ascii'))
            self.codec.send_frame(sock, key.encode('ascii'))
            result = self.codec.receive_frame(sock)
        finally:
            sock.close()

        if len(result) != len(text):
            raise ProtocolError("Result frame is %d bytes, expected %d"
                                % (len(result), len(text)))
        return result.decode('ascii', errors='replace')
