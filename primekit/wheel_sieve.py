"""
Wheel sieve over the residues coprime to 30.

Only numbers coprime to 2, 3 and 5 are stored: 8 slots per block of 30
integers instead of 30. The first slot holds 7, so block b covers the values
30b + (7, 11, 13, 17, 19, 23, 29, 31).

Index mapping:
- index_to_n(i) = 30 * (i // 8) + WHEEL_VALUES[i % 8]
- n_to_index(n) = wheel_count(n) - 1, for n >= 7 coprime to 30

wheel_count(n) counts the wheel values <= n, so the wheel values in [lo, hi]
occupy the indices wheel_count(lo - 1) .. wheel_count(hi) - 1.

For n=7:  index 0
For n=31: index 7
For n=37: index 8
"""

from math import isqrt
from typing import Tuple

import numpy as np

from primekit.errors import PrimeDomainError

# Largest sieve endpoint: sieve positions are int64 NumPy indices.
FIXED_WIDTH_MAX = 2**63 - 1

# Gaps between consecutive wheel values, starting at 7.
WHEEL = (4, 2, 4, 2, 4, 6, 2, 6)
WHEEL_VALUES = np.cumsum((7,) + WHEEL[:-1]).astype(np.int64)

# WHEEL_COUNTS[r] = number of wheel values in a block that are <= 30b + 1 + r
WHEEL_COUNTS = np.array(
    [np.count_nonzero(WHEEL_VALUES <= r + 1) for r in range(30)], dtype=np.int64
)


def wheel_count(n: int) -> int:
    """Number of wheel values (7, 11, 13, ...) that are <= n."""
    if n < 7:
        return 0
    d, r = divmod(n - 1, 30)
    return 8 * d + int(WHEEL_COUNTS[r])


def index_to_n(i: int) -> int:
    """Convert wheel index to actual number."""
    # i=0 → 7, i=1 → 11, ..., i=7 → 31, i=8 → 37
    return 30 * (i >> 3) + int(WHEEL_VALUES[i & 7])


def n_to_index(n: int) -> int:
    """Convert number (must be >= 7 and coprime to 30) to wheel index."""
    if n < 7 or n % 2 == 0 or n % 3 == 0 or n % 5 == 0:
        raise PrimeDomainError(f"{n} is not a wheel value (>= 7, coprime to 30)", n)
    return wheel_count(n) - 1


def wheel_position(n: int) -> Tuple[int, int]:
    """(block, offset) of a wheel value: n == 30 * block + WHEEL_VALUES[offset]."""
    return divmod(n_to_index(n), 8)


def index_to_n_array(indices: np.ndarray) -> np.ndarray:
    return 30 * (indices >> 3) + WHEEL_VALUES[indices & 7]


def _cross_off(sieve: np.ndarray, base: int, p: int, w_min: int) -> None:
    """
    Clear every p*w inside the sieve with w a wheel value >= w_min.

    sieve[k] stands for index_to_n(base + k). p*w and p*(w + 30) are 8*p
    indices apart, so each of the eight residue classes of w is one strided
    slice, like flags[p*p::p] = False on an unwheeled sieve.
    """
    j0 = wheel_count(w_min - 1)
    step = 8 * p
    for j in range(j0, j0 + 8):
        # Python ints: the start is compared before NumPy sees it
        start = wheel_count(p * index_to_n(j)) - 1 - base
        if start >= len(sieve):
            break
        sieve[start::step] = False


def wheel_sieve_upto(limit: int) -> np.ndarray:
    """
    Sieve the wheel values in [7, limit].

    Parameters
    ----------
    limit : int
        Upper bound (inclusive), >= 7.

    Returns
    -------
    np.ndarray
        Boolean array of length wheel_count(limit).
        sieve[i] is True iff index_to_n(i) is prime.
    """
    if limit < 7:
        raise PrimeDomainError(f"limit must be >= 7, got {limit}", limit)

    sieve = np.ones(wheel_count(limit), dtype=bool)
    for i in range(wheel_count(isqrt(limit))):
        if sieve[i]:
            p = index_to_n(i)
            _cross_off(sieve, 0, p, p)
    return sieve


def wheel_sieve_range(lo: int, hi: int) -> np.ndarray:
    """
    Segmented wheel sieve over [lo, hi].

    Bootstraps itself: the wheel primes up to sqrt(hi) are found with
    wheel_sieve_upto, then their multiples are cleared inside [lo, hi].

    Parameters
    ----------
    lo, hi : int
        Bounds (inclusive), 7 <= lo <= hi <= FIXED_WIDTH_MAX.

    Returns
    -------
    np.ndarray
        Boolean array; entry k stands for index_to_n(wheel_count(lo - 1) + k)
        and is True iff that number is prime.
    """
    if not 7 <= lo <= hi <= FIXED_WIDTH_MAX:
        raise PrimeDomainError(
            f"7 <= lo <= hi <= {FIXED_WIDTH_MAX} must hold, got lo={lo}, hi={hi}", lo, hi
        )
    if lo == 7:
        return wheel_sieve_upto(hi)

    wlo = wheel_count(lo - 1)
    sieve = np.ones(wheel_count(hi) - wlo, dtype=bool)
    # Every composite wheel value has a prime factor >= 7, so below 49 none exist
    if hi < 49:
        return sieve

    small_sieve = wheel_sieve_upto(isqrt(hi))
    for i in np.flatnonzero(small_sieve):
        p = index_to_n(int(i))
        # Start at p*p, or at the first multiple of p >= lo
        _cross_off(sieve, wlo, p, max(p, -(-lo // p)))
    return sieve
