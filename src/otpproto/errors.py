#!/usr/bin/env python

"""Exception hierarchy for the OTP cipher programs.

Every error carries an ``exit_code``.  Errors propagate up to the nearest
boundary (a server request handler, or a program's ``main``) which decides
whether to tear down one session or exit the whole process.

::

    OTPError
     +- InputError          1   InvalidCharacter, FileOpenError, KeyTooShort
     +- AddressError        3
     +- TransportError      4   ConnectionClosed
     +- ProtocolError       6   FrameTooLarge
         +- RoleMismatch    5
"""

EXIT_USAGE = 2
EXIT_MEMORY = 7


class OTPError(Exception):
    """Base class for all errors raised by otpproto."""
    exit_code = 1


class InputError(OTPError):
    """Client input rejected before any connection is made."""
    exit_code = 1


class InvalidCharacter(InputError):
    def __init__(self, path, character):
        self.path = path
        self.character = character
        super().__init__(
            "Invalid character found in file %s: %r, %d"
            % (path, character, ord(character)))


class FileOpenError(InputError):
    def __init__(self, path, reason):
        self.path = path
        super().__init__("Unable to open file %s: %s" % (path, reason))


class KeyTooShort(InputError):
    def __init__(self, text_length, key_length):
        self.text_length = text_length
        self.key_length = key_length
        super().__init__(
            "Key shorter than text (%d < %d)" % (key_length, text_length))


class AddressError(OTPError):
    """Host name or service could not be resolved."""
    exit_code = 3


class TransportError(OTPError):
    """A socket operation failed; fatal to the current session."""
    exit_code = 4


class ConnectionClosed(TransportError):
    """The peer closed the stream before a full unit was read."""


class ProtocolError(OTPError):
    """The peer sent something the protocol does not allow."""
    exit_code = 6


class FrameTooLarge(ProtocolError):
    def __init__(self, length, limit):
        self.length = length
        self.limit = limit
        super().__init__("Frame too large: %d > %d" % (length, limit))


class RoleMismatch(ProtocolError):
    """The peer announced a role tag other than the one expected."""
    exit_code = 5

    def __init__(self, expected, received):
        self.expected = expected
        self.received = received
        super().__init__(
            "Role mismatch: expected %r, peer sent %r" % (expected, received))
