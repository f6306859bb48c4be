"""
Least-prime-factor table for small odd numbers.

Entry n >> 1 describes the odd number n:
- 0 means n is prime (sentinel, as in the segmented SPF sieves)
- otherwise the smallest prime factor of n
- entry 0 (n = 1) holds 1 as a non-prime marker

Built once at import and frozen; every reader sees the same array.
"""

from math import isqrt

import numpy as np

SMALL_FACTOR_LIMIT = 2**16


def small_factor_table(limit: int = SMALL_FACTOR_LIMIT) -> np.ndarray:
    """
    Compute the least prime factor of every odd number below limit.

    Parameters
    ----------
    limit : int
        Exclusive upper bound, even.

    Returns
    -------
    np.ndarray
        Array of length limit // 2, indexed by n >> 1.
        uint8 while every least factor fits (limit <= 2**16).
    """
    dtype = np.uint8 if isqrt(limit - 1) < 256 else np.uint32
    table = np.zeros(limit // 2, dtype=dtype)
    table[0] = 1

    for p in range(3, isqrt(limit - 1) + 1, 2):
        if table[p >> 1] != 0:  # p is not prime
            continue
        idx = np.arange(p * p, limit, 2 * p) >> 1
        # Keep factors set by smaller primes
        idx = idx[table[idx] == 0]
        table[idx] = p
    return table


SMALL_FACTOR_TABLE = small_factor_table()
SMALL_FACTOR_TABLE.flags.writeable = False


def min_factor(n: int) -> int:
    """Smallest prime factor of odd n with 1 < n < SMALL_FACTOR_LIMIT."""
    m = int(SMALL_FACTOR_TABLE[n >> 1])
    return n if m == 0 else m
