#!/usr/bin/env python

"""Read plaintext, ciphertext and key files for the clients."""

from . import cipher
from .errors import FileOpenError, InvalidCharacter

_ALLOWED = frozenset(cipher.ALPHABET)


def read_text(path):
    """Return the contents of ``path``, validated against the alphabet.

    One trailing newline is stripped.  Any other character outside
    ``A`` .. ``Z`` and space raises :class:`InvalidCharacter`.
    """
    try:
        with open(path, 'r', encoding='ascii', errors='surrogateescape',
                  newline='') as f:
            content = f.read()
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e

    if content.endswith('\n'):
        content = content[:-1]

    for c in content:
        if c not in _ALLOWED:
            raise InvalidCharacter(path, c)

    return content
