"""
Integer factorization.

Responsibility: turn an integer into (prime, multiplicity) pairs.

Strategy, cheapest first:
1. strip powers of two
2. below 2**16, walk the least-factor table
3. a prime input is returned as is (checked once, before any trial division)
4. trial division by the table primes below 2**16
5. a residue that survived trial division and is <= 2**32 is prime
6. Pollard's rho (Brent's variant) for large composite residues

Conventions: 0 factors as {0: 1}, negative n as {-1: 1} plus the
factorization of -n, and 1 has no factors.
"""

import operator
from collections.abc import Mapping
from math import gcd
from typing import Iterator, Optional, Tuple

import numpy as np

from primekit.primality import is_prime
from primekit.small_factors import SMALL_FACTOR_LIMIT, min_factor

# Residues below this have no factor past trial division unless they are prime
TRIAL_DIVISION_CEILING = 2**32

# Iterations of the rho map between gcd evaluations
RHO_BLOCK_SIZE = 100

# (remaining n, next trial divisor)
FactorState = Tuple[int, int]


class Factorization(Mapping):
    """
    Prime -> multiplicity, with primes in ascending order.

    Immutable. Compares equal to any mapping with the same items, so
    factor(100) == {2: 2, 5: 2}.
    """

    def __init__(self, pairs=()):
        counts = {}
        for p, k in pairs:
            counts[p] = counts.get(p, 0) + k
        self._factors = dict(sorted(counts.items()))

    def __getitem__(self, p):
        return self._factors[p]

    def __iter__(self):
        return iter(self._factors)

    def __len__(self):
        return len(self._factors)

    def __hash__(self):
        return hash(tuple(self._factors.items()))

    def __repr__(self):
        if not self._factors:
            return "Factorization()"
        return " * ".join(str(p) if k == 1 else f"{p}^{k}" for p, k in self._factors.items())

    @property
    def n(self) -> int:
        """The number this factorization multiplies out to."""
        result = 1
        for p, k in self._factors.items():
            result *= p**k
        return result


def _randbelow(rng: np.random.Generator, n: int) -> int:
    """Uniform integer in [0, n) for arbitrarily large n."""
    if n <= 2**63 - 1:
        return int(rng.integers(0, n))
    # Rejection sampling on whole bytes
    nbytes = (n.bit_length() + 7) // 8
    while True:
        r = int.from_bytes(rng.bytes(nbytes), "little")
        r >>= 8 * nbytes - n.bit_length()
        if r < n:
            return r


def _brent_rho(n: int, rng: np.random.Generator) -> int:
    """
    One nontrivial factor of the odd composite n (not necessarily prime).

    Iterates y -> y^2 + c (mod n) with doubling cycle lengths, batching
    |x - y| products into one gcd per RHO_BLOCK_SIZE steps. When a batch
    overshoots, the last block is replayed one step at a time. A run that
    only finds gcd == n is restarted with fresh c and y.
    """
    while True:
        c = 1 + _randbelow(rng, n - 1)
        while c == n - 2:
            c = 1 + _randbelow(rng, n - 1)
        y = _randbelow(rng, n)
        m = RHO_BLOCK_SIZE
        g = r = q = 1
        x = ys = 0

        while g == 1:
            x = y
            for _ in range(r):
                y = (y * y + c) % n
            k = 0
            while k < r and g == 1:
                ys = y
                for _ in range(min(m, r - k)):
                    y = (y * y + c) % n
                    q = q * abs(x - y) % n
                g = gcd(q, n)
                k += m
            r *= 2

        if g == n:
            # Backtrack from the start of the last block
            g = 1
            while g == 1:
                ys = (ys * ys + c) % n
                g = gcd(abs(x - ys), n)

        if g != n:
            return g


def pollard_factor(n: int, rng: Optional[np.random.Generator] = None,
                   seed: Optional[int] = None) -> int:
    """
    Return a prime factor of the odd composite n.

    Rho may hand back a composite divisor; that divisor is refined in a
    loop until a prime comes out.

    Parameters
    ----------
    n : int
        Odd composite to split.
    rng : np.random.Generator, optional
        Random source. Built from `seed` when omitted.
    seed : int, optional
        Random seed for reproducibility.

    Returns
    -------
    int
        A prime dividing n.
    """
    n = operator.index(n)
    if rng is None:
        rng = np.random.default_rng(seed)

    residue = n
    while not is_prime(residue):
        g = _brent_rho(residue, rng)
        cofactor = residue // g
        f = min(g, cofactor)
        shared = gcd(g, cofactor)
        if shared != 1:
            f = shared
        residue = f
    return residue


def factor_step(state: FactorState, rng: np.random.Generator):
    """
    Produce the next (prime, multiplicity) pair from a factoring state.

    Parameters
    ----------
    state : tuple
        (remaining n, next trial divisor). Start from (n, 3).
    rng : np.random.Generator
        Random source for Pollard's rho.

    Returns
    -------
    tuple or None
        ((prime, multiplicity), next_state), or None once n is used up.
    """
    n, p = state
    if n <= p:
        if n == 1:
            return None
        if n < 0:
            return (-1, 1), (-n, p)
        if n == 0:
            return (0, 1), (1, p)

    tz = (n & -n).bit_length() - 1
    if tz > 0:
        return (2, tz), (n >> tz, p)

    if n < SMALL_FACTOR_LIMIT:
        p = min_factor(n)
        num_p = 1
        while True:
            n //= p
            if n == 1 or min_factor(n) != p:
                break
            num_p += 1
        return (p, num_p), (n, p)

    if p == 3 and is_prime(n):
        return (n, 1), (1, n)

    for d in range(p, SMALL_FACTOR_LIMIT, 2):
        if min_factor(d) != d:
            continue
        num_d = 0
        while True:
            q, r = divmod(n, d)
            if r:
                break
            num_d += 1
            n = q
        if num_d:
            return (d, num_d), (n, d + 2)
        if d * d > n:
            break

    # Below the ceiling a composite would have been caught by trial division
    if n <= TRIAL_DIVISION_CEILING or is_prime(n):
        return (n, 1), (1, n)

    f = pollard_factor(n, rng)
    num_f = 0
    while n % f == 0:
        n //= f
        num_f += 1
    return (f, num_f), (n, f)


def each_factor(n: int, seed: Optional[int] = None) -> Iterator[Tuple[int, int]]:
    """
    Lazily yield (prime, multiplicity) pairs of n in order of discovery.

    The iterator is single-use: consuming it advances its state. Call
    each_factor again for an independent pass.

    Parameters
    ----------
    n : int
        Integer to factor (Python or NumPy integer).
    seed : int or np.random.Generator, optional
        Random source for Pollard's rho.

    Yields
    ------
    tuple
        (prime, multiplicity)
    """
    state = (operator.index(n), 3)
    rng = np.random.default_rng(seed)
    while True:
        step = factor_step(state, rng)
        if step is None:
            return
        pair, state = step
        yield pair


def factor(n: int, seed: Optional[int] = None) -> Factorization:
    """
    Compute the prime factorization of n.

    Parameters
    ----------
    n : int
        Integer to factor (Python or NumPy integer).
    seed : int or np.random.Generator, optional
        Random source for Pollard's rho.

    Returns
    -------
    Factorization
        Ascending prime -> multiplicity. factor(0) is {0: 1};
        factor(-9) is {-1: 1, 3: 2}; factor(1) is empty.
    """
    return Factorization(each_factor(n, seed))
