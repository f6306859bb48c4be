"""
Prime generation over a range.

Responsibility: turn the wheel sieve into plain answers about [lo, hi].
2, 3 and 5 are not on the wheel and are handled here directly.
"""

import operator
from typing import Optional

import numpy as np

from primekit.errors import PrimeDomainError
from primekit.wheel_sieve import (
    FIXED_WIDTH_MAX,
    index_to_n_array,
    wheel_count,
    wheel_sieve_range,
)

OFF_WHEEL_PRIMES = (2, 3, 5)


def _bounds(lo: int, hi: Optional[int]):
    if hi is None:
        lo, hi = 1, lo
    return operator.index(lo), operator.index(hi)


def primes_mask(lo: int, hi: Optional[int] = None) -> np.ndarray:
    """
    Boolean primality flags for every integer in [lo, hi].

    primes_mask(hi) is primes_mask(1, hi).

    Parameters
    ----------
    lo : int
        Lower bound (inclusive), >= 1.
    hi : int
        Upper bound (inclusive), <= FIXED_WIDTH_MAX.

    Returns
    -------
    np.ndarray
        Boolean array of length hi - lo + 1; mask[k] is True iff lo + k is prime.
    """
    lo, hi = _bounds(lo, hi)
    if not 0 < lo <= hi <= FIXED_WIDTH_MAX:
        raise PrimeDomainError(
            f"0 < lo <= hi <= {FIXED_WIDTH_MAX} must hold, got lo={lo}, hi={hi}", lo, hi
        )

    mask = np.zeros(hi - lo + 1, dtype=bool)
    for p in OFF_WHEEL_PRIMES:
        if lo <= p <= hi:
            mask[p - lo] = True
    if hi < 7:
        return mask

    start = max(7, lo)
    sieve = wheel_sieve_range(start, hi)
    wlo = wheel_count(start - 1)
    values = index_to_n_array(np.arange(wlo, wlo + len(sieve), dtype=np.int64))
    mask[values - lo] = sieve
    return mask


def primes(lo: int, hi: Optional[int] = None) -> np.ndarray:
    """
    Return all primes in [lo, hi], ascending.

    primes(hi) is primes(1, hi). Bounds below 2 are allowed.

    Parameters
    ----------
    lo : int
        Lower bound (inclusive).
    hi : int
        Upper bound (inclusive), <= FIXED_WIDTH_MAX.

    Returns
    -------
    np.ndarray
        int64 array of primes.
    """
    lo, hi = _bounds(lo, hi)
    if lo > hi:
        raise PrimeDomainError(f"lo <= hi must hold, got lo={lo}, hi={hi}", lo, hi)
    if hi > FIXED_WIDTH_MAX:
        raise PrimeDomainError(f"hi must be <= {FIXED_WIDTH_MAX}, got {hi}", hi)

    head = [p for p in OFF_WHEEL_PRIMES if lo <= p <= hi]
    if hi < 7:
        return np.array(head, dtype=np.int64)

    start = max(7, lo)
    sieve = wheel_sieve_range(start, hi)
    wlo = wheel_count(start - 1)
    tail = index_to_n_array(np.flatnonzero(sieve) + wlo)
    return np.concatenate([np.array(head, dtype=np.int64), tail])
