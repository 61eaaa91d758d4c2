#!/usr/bin/env python

"""Random key generation for the one-time pad."""

import os

import numpy as np

from . import cipher


def generate_key(length, rng=None):
    """Return ``length`` independent, uniformly chosen alphabet symbols.

    Parameters
    ----------
    length : int
        Number of symbols; must be positive.
    rng : numpy.random.Generator, optional
        Source of randomness.  By default a fresh generator seeded from
        ``os.urandom`` is used.

    Returns
    -------
    str
    """
    if length <= 0:
        raise ValueError("key length must be positive, got %d" % length)

    if rng is None:
        seed_int = int.from_bytes(os.urandom(32), 'big')
        rng = np.random.default_rng(seed_int)

    return cipher.from_values(rng.integers(0, cipher.MODULUS, size=length))
