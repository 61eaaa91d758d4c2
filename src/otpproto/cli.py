#!/usr/bin/env python

"""Command-line entry points for the cipher servers, clients and keygen.

Every ``*_main`` function returns a process exit status; see
:mod:`otpproto.errors` for the mapping.
"""

import argparse
import logging
import sys

from . import handshake
from .errors import EXIT_MEMORY, KeyTooShort, OTPError
from .keygen import generate_key
from .link import CipherClient, CipherServer, DEFAULT_HOST, \
    DEFAULT_LISTEN_ADDRESS, resolve_address
from .textfile import read_text


class PortRangeAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        min_port = 1
        max_port = 65535
        if not min_port <= values <= max_port:
            raise argparse.ArgumentError(
                self, "Port number must be between %d and %d"
                % (min_port, max_port))
        setattr(namespace, self.dest, values)


def positive_float(value):
    f = float(value)
    if f <= 0:
        raise argparse.ArgumentTypeError("must be a positive number")
    return f


def report(prog, error):
    """Write ``error`` to stderr prefixed with the program name."""
    sys.stderr.write('%s error: %s\n' % (prog, error))
    return getattr(error, 'exit_code', 1)


def server_main(role, argv=None):
    parser = argparse.ArgumentParser(
        description="Serve one-time pad %s requests." % role.description)

    parser.add_argument(
        'port',
        type=int,
        help="The port upon which to listen.",
        action=PortRangeAction)

    parser.add_argument(
        '-l', '--listen-address',
        type=str,
        help="The address upon which to listen.",
        default=DEFAULT_LISTEN_ADDRESS)

    parser.add_argument(
        '--timeout',
        type=positive_float,
        help="Drop a client that stalls for this many seconds.",
        default=None)

    parser.add_argument(
        '-v', '--verbose',
        help="Log every session.",
        action='store_true')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
        format=parser.prog + ': %(levelname)s: %(message)s')

    try:
        server = CipherServer((args.listen_address, args.port), role,
                              timeout=args.timeout)
    except OTPError as e:
        return report(parser.prog, e)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        sys.stderr.write("\n")
    except OTPError as e:
        return report(parser.prog, e)
    finally:
        server.close()

    return 0


def client_main(role, argv=None):
    text_name = 'plaintext' if role is handshake.ENCRYPT else 'ciphertext'

    parser = argparse.ArgumentParser(
        description="Send a file to a one-time pad %s server and print the "
                    "result." % role.description)

    parser.add_argument(
        'text_file',
        metavar=text_name,
        help="File holding the %s (A-Z and space)." % text_name)

    parser.add_argument(
        'key_file',
        metavar='key',
        help="File holding the key; at least as long as the %s."
             % text_name)

    parser.add_argument(
        'port',
        type=int,
        help="The port of the server.",
        action=PortRangeAction)

    parser.add_argument(
        '--host',
        type=str,
        help="The host running the server.",
        default=DEFAULT_HOST)

    parser.add_argument(
        '--timeout',
        type=positive_float,
        help="Give up if the server stalls for this many seconds.",
        default=None)

    args = parser.parse_args(argv)

    try:
        text = read_text(args.text_file)
        key = read_text(args.key_file)
        if len(key) < len(text):
            raise KeyTooShort(len(text), len(key))

        address = resolve_address(args.host, args.port)
        result = CipherClient(address, role, timeout=args.timeout) \
            .transform(text, key)
    except OTPError as e:
        return report(parser.prog, e)
    except MemoryError:
        sys.stderr.write('%s error: Unable to allocate memory\n'
                         % parser.prog)
        return EXIT_MEMORY

    sys.stdout.write(result + "\n")
    return 0


def keygen_main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print a random one-time pad key.")

    parser.add_argument(
        'length',
        type=int,
        help="The number of key symbols to generate.")

    args = parser.parse_args(argv)
    if args.length <= 0:
        parser.error("length must be a positive integer")

    sys.stdout.write(generate_key(args.length) + "\n")
    return 0


def enc_server(argv=None):
    return server_main(handshake.ENCRYPT, argv)


def dec_server(argv=None):
    return server_main(handshake.DECRYPT, argv)


def enc_client(argv=None):
    return client_main(handshake.ENCRYPT, argv)


def dec_client(argv=None):
    return client_main(handshake.DECRYPT, argv)
