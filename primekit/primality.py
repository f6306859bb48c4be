"""
Primality testing.

Small inputs are answered from the least-factor table, medium ones are
pre-filtered by trial division, and the rest go through Miller-Rabin:
- n < 2**32: one base chosen by hashing n (Forisek & Jancina, FJ32_256)
- n < 2**64: fixed base sets, exact over the whole range
- larger n: `reps` rounds with the first `reps` primes as bases. True
  means a strong probable prime to those bases; the bases are fixed, so a
  composite built to fool them (2**67 - 1 fools base 2) is accepted every time
"""

import operator
from typing import Tuple

from primekit.errors import PrimeDomainError
from primekit.small_factors import SMALL_FACTOR_LIMIT, min_factor

DEFAULT_REPS = 25

TRIAL_DIVISORS = (3, 5, 7, 11, 13, 17, 19, 23)

# Hashed single-base table for n < 2**32
BASES = (
    15591,  2018,   166,  7429,  8064, 16045, 10503,  4399,  1949,  1295,  2776,  3620,
      560,  3128,  5212,  2657,  2300,  2021,  4652,  1471,  9336,  4018,  2398, 20462,
    10277,  8028,  2213,  6219,   620,  3763,  4852,  5012,  3185,  1333,  6227,  5298,
     1074,  2391,  5113,  7061,   803,  1269,  3875,   422,   751,   580,  4729, 10239,
      746,  2951,   556,  2206,  3778,   481,  1522,  3476,   481,  2487,  3266,  5633,
      488,  3373,  6441,  3344,    17, 15105,  1490,  4154,  2036,  1882,  1813,   467,
     3307, 14042,  6371,   658,  1005,   903,   737,  1887,  7447,  1888,  2848,  1784,
     7559,  3400,   951, 13969,  4304,   177,    41, 19875,  3110, 13221,  8726,   571,
     7043,  6943,  1199,   352,  6435,   165,  1169,  3315,   978,   233,  3003,  2562,
     2994, 10587, 10030,  2377,  1902,  5354,  4447,  1555,   263, 27027,  2283,   305,
      669,  1912,   601,  6186,   429,  1930, 14873,  1784,  1661,   524,  3577,   236,
     2360,  6146,  2850, 55637,  1753,  4178,  8466,   222,  2579,  2743,  2031,  2226,
     2276,   374,  2132,   813, 23788,  1610,  4422,  5159,  1725,  3597,  3366, 14336,
      579,   165,  1375, 10018, 12616,  9816,  1371,   536,  1867, 10864,   857,  2206,
     5788,   434,  8085, 17618,   727,  3639,  1595,  4944,  2129,  2029,  8195,  8344,
     6232,  9183,  8126,  1870,  3296,  7455,  8947, 25017,   541, 19115,   368,   566,
     5674,   411,   522,  1027,  8215,  2050,  6544, 10049,   614,   774,  2333,  3007,
    35201,  4706,  1152,  1785,  1028,  1540,  3743,   493,  4474,  2521, 26845,  8354,
      864, 18915,  5465,  2447,    42,  4511,  1660,   166,  1249,  6259,  2553,   304,
      272,  7286,    73,  6554,   899,  2816,  5197, 13330,  7054,  2818,  3199,   811,
      922,   350,  7514,  4452,  3449,  2663,  4708,   418,  1621,  1171,  3471,    88,
    11345,   412,  1559,   194,
)

# (exclusive bound, bases) for inputs between 2**32 and 2**64
WITNESS_SETS = (
    (2152302898747, (2, 3, 5, 7, 11)),
    (3474749660383, (2, 3, 5, 7, 11, 13)),
    (2**64, (2, 325, 9375, 28178, 450775, 9780504, 1795265022)),
)

_MASK64 = 2**64 - 1
_HASH_MULTIPLIER = 0x45D9F3B


def _hashed_base(n: int) -> int:
    i = (((n >> 16) ^ n) * _HASH_MULTIPLIER) & _MASK64
    i = (((i >> 16) ^ i) * _HASH_MULTIPLIER) & _MASK64
    return BASES[((i >> 16) ^ i) & 255]


def _first_primes(count: int) -> Tuple[int, ...]:
    found = [2]
    candidate = 3
    while len(found) < count:
        if all(candidate % p for p in found if p * p <= candidate):
            found.append(candidate)
        candidate += 2
    return tuple(found[:count])


_FIRST_PRIMES = _first_primes(DEFAULT_REPS)


def witnesses(n: int, reps: int = DEFAULT_REPS) -> Tuple[int, ...]:
    """
    Miller-Rabin bases used for odd n >= 2**16.

    The choice is deterministic: the same n always gets the same bases.
    """
    if n < 2**32:
        return (_hashed_base(n),)
    for bound, bases in WITNESS_SETS:
        if n < bound:
            return bases
    if reps <= len(_FIRST_PRIMES):
        return _FIRST_PRIMES[:reps]
    return _first_primes(reps)


def miller_rabin(n: int, bases) -> bool:
    """
    Strong probable-prime test of odd n > 2 to every base in `bases`.

    False means n is certainly composite.
    """
    n_minus_1 = n - 1
    s = (n_minus_1 & -n_minus_1).bit_length() - 1
    d = n_minus_1 >> s
    for a in bases:
        x = pow(a, d, n)
        if x == 1:
            continue
        t = s
        while x != n_minus_1:
            t -= 1
            if t <= 0:
                return False
            x = x * x % n
            if x == 1:
                return False
    return True


def is_prime(n: int, reps: int = DEFAULT_REPS) -> bool:
    """
    Check if n is prime.

    Defined for every integer: anything below 2 is not prime. Exact for
    n < 2**64; above that True means n is a strong probable prime to the
    first `reps` prime bases.

    Parameters
    ----------
    n : int
        Number to check (Python or NumPy integer).
    reps : int
        Miller-Rabin rounds for n >= 2**64 (default 25).

    Returns
    -------
    bool
        True if n is prime.
    """
    n = operator.index(n)
    reps = operator.index(reps)
    if reps < 1:
        raise PrimeDomainError(f"reps must be >= 1, got {reps}", reps)

    if n < 2:
        return False
    if n & 1 == 0:
        return n == 2
    if n < SMALL_FACTOR_LIMIT:
        return min_factor(n) == n
    for m in TRIAL_DIVISORS:
        if n % m == 0:
            return False
    return miller_rabin(n, witnesses(n, reps))
