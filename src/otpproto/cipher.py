#!/usr/bin/env python

r"""Additive one-time pad over the 27-symbol alphabet.

Each of the symbols ``A`` .. ``Z`` and space is identified with an element
of :math:`\mathbb{Z}_{27}` (``A`` is 0, space is 26) and the pad is applied
symbol by symbol:

    :math:`c_i = (t_i + k_i) \bmod 27`   (encrypt)

    :math:`t_i = (c_i - k_i) \bmod 27`   (decrypt)

Encryption and decryption are mutual inverses for any key.  The transform is
vectorised with numpy and performs no alphabet validation: callers are
expected to hand it text that has already been checked.
"""

import numpy as np

ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ '
MODULUS = len(ALPHABET)

ENCRYPT = 1
DECRYPT = -1

_SYMBOLS = np.frombuffer(ALPHABET.encode('ascii'), dtype=np.uint8)

# Byte -> ring value.  Bytes outside the alphabet go through the letter
# formula, so the reduced result still lands inside the alphabet.
_VALUES = np.arange(256, dtype=np.int16) - ord('A')
_VALUES[ord(' ')] = MODULUS - 1


def _as_array(data):
    if isinstance(data, str):
        data = data.encode('ascii')
    return np.frombuffer(data, dtype=np.uint8)


def to_values(text):
    """Map text (str or bytes) to an array of ring values in [0, 26]."""
    return np.mod(_VALUES[_as_array(text)], MODULUS)


def from_values(values):
    """Map an array of ring values back to an ASCII string."""
    return _SYMBOLS[np.asarray(values, dtype=np.intp)].tobytes().decode('ascii')


def transform(text, key, direction):
    """Apply the pad to ``text`` using the first ``len(text)`` key symbols.

    Parameters
    ----------
    text : str or bytes-like
        Plaintext (encrypt) or ciphertext (decrypt).
    key : str or bytes-like
        Key material, at least as long as ``text``.  Extra symbols are
        ignored.
    direction : int
        ``ENCRYPT`` or ``DECRYPT``.

    Returns
    -------
    str or bytes
        Same type and length as ``text``.
    """
    if direction not in (ENCRYPT, DECRYPT):
        raise ValueError("direction must be ENCRYPT or DECRYPT, got %r"
                         % (direction,))

    t = _as_array(text)
    k = _as_array(key)
    if len(k) < len(t):
        raise ValueError("key shorter than text (%d < %d)" % (len(k), len(t)))

    values = np.mod(_VALUES[t] + direction * _VALUES[k[:len(t)]], MODULUS)
    result = _SYMBOLS[values].tobytes()

    if isinstance(text, str):
        return result.decode('ascii')
    return result


def encrypt(text, key):
    return transform(text, key, ENCRYPT)


def decrypt(text, key):
    return transform(text, key, DECRYPT)
