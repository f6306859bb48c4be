"""
Cross-check the engines against independent oracles.

Compares:
1. primes(lo, hi) against a plain Sieve of Eratosthenes
2. primes_mask(lo, hi) against is_prime, position by position
3. factor(n) products and prime keys for random n
4. next_prime / prev_prime bracketing for random n
5. Lucas-Lehmer against Miller-Rabin on Mersenne numbers

Each check returns a summary dict; run_all_checks collects them in a
DataFrame.
"""

import time
from typing import Any, Dict, Iterable, Optional

import numpy as np
import pandas as pd

from primekit.factorization import factor
from primekit.lucas_lehmer import is_mersenne_prime
from primekit.primality import DEFAULT_REPS, is_prime
from primekit.primes import primes, primes_mask
from primekit.search import next_prime, prev_prime


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Plain Sieve of Eratosthenes, no wheel: the reference for the wheel sieve.
    """
    flags = np.ones(N + 1, dtype=bool)
    flags[:2] = False
    for p in range(2, int(N**0.5) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags


def _summary(check: str, cases: int, failures: int, seconds: float) -> Dict[str, Any]:
    return {
        'check': check,
        'passed': failures == 0,
        'cases': cases,
        'failures': failures,
        'seconds': round(seconds, 3),
    }


def _random_int(rng: np.random.Generator, bits: int) -> int:
    """Random integer with exactly `bits` bits."""
    nbytes = (bits + 7) // 8
    r = int.from_bytes(rng.bytes(nbytes), 'little') >> (8 * nbytes - bits)
    return r | (1 << (bits - 1))


def verify_sieve(lo: int, hi: int, verbose: bool = True) -> Dict[str, Any]:
    """Verify primes(lo, hi) lists exactly the primes of the plain sieve."""
    if verbose:
        print(f"\n=== Verifying primes({lo:,}, {hi:,}) ===")

    t0 = time.time()
    got = primes(lo, hi)
    elapsed = time.time() - t0

    flags = prime_flags_upto(hi)
    expected = np.flatnonzero(flags[max(lo, 0):]) + max(lo, 0)

    failures = len(np.setxor1d(got, expected))
    if verbose:
        print(f"  Wheel sieve: {elapsed:.2f}s, {len(got):,} primes")
        print(f"  Mismatches: {failures}")
    return _summary('sieve', hi - lo + 1, failures, elapsed)


def verify_mask(lo: int, hi: int, verbose: bool = True) -> Dict[str, Any]:
    """Verify primes_mask(lo, hi)[k] == is_prime(lo + k) for every k."""
    if verbose:
        print(f"\n=== Verifying primes_mask({lo:,}, {hi:,}) ===")

    t0 = time.time()
    mask = primes_mask(lo, hi)
    failures = 0
    for k, flag in enumerate(mask):
        if bool(flag) != is_prime(lo + k):
            failures += 1
            if verbose and failures <= 10:
                print(f"  MISMATCH at {lo + k}: mask={bool(flag)}")
    elapsed = time.time() - t0

    if verbose:
        print(f"  Checked {len(mask):,} values in {elapsed:.2f}s, mismatches: {failures}")
    return _summary('mask', len(mask), failures, elapsed)


def verify_factorization(samples: int, bits: int, seed: Optional[int] = None,
                         verbose: bool = True) -> Dict[str, Any]:
    """Verify factor(n) multiplies back to n with prime keys, for random n."""
    if verbose:
        print(f"\n=== Verifying factor() on {samples} random {bits}-bit numbers ===")

    rng = np.random.default_rng(seed)
    failures = 0
    t0 = time.time()
    for _ in range(samples):
        n = _random_int(rng, bits)
        f = factor(n, seed=rng)
        if f.n != n or not all(is_prime(p) for p in f):
            failures += 1
            if verbose and failures <= 10:
                print(f"  MISMATCH: factor({n}) = {f!r}")
    elapsed = time.time() - t0

    if verbose:
        print(f"  {samples} factorizations in {elapsed:.2f}s, failures: {failures}")
    return _summary('factorization', samples, failures, elapsed)


def verify_search(samples: int, seed: Optional[int] = None,
                  verbose: bool = True) -> Dict[str, Any]:
    """Verify prev_prime(n) <= n <= next_prime(n), with equality iff n is prime."""
    if verbose:
        print(f"\n=== Verifying next_prime / prev_prime on {samples} values ===")

    rng = np.random.default_rng(seed)
    failures = 0
    t0 = time.time()
    for n in rng.integers(2, 10**12, size=samples):
        n = int(n)
        lo, hi = prev_prime(n), next_prime(n)
        prime = is_prime(n)
        ok = lo <= n <= hi and (lo == n) == prime and (hi == n) == prime
        ok = ok and is_prime(lo) and is_prime(hi)
        if not ok:
            failures += 1
            if verbose and failures <= 10:
                print(f"  MISMATCH at {n}: prev={lo}, next={hi}")
    elapsed = time.time() - t0

    if verbose:
        print(f"  {samples} searches in {elapsed:.2f}s, failures: {failures}")
    return _summary('search', samples, failures, elapsed)


def verify_mersenne(exponents: Iterable[int], reps: int = DEFAULT_REPS,
                    verbose: bool = True) -> Dict[str, Any]:
    """Verify Lucas-Lehmer agrees with Miller-Rabin on 2**p - 1."""
    exponents = list(exponents)
    if verbose:
        print(f"\n=== Verifying Lucas-Lehmer on {len(exponents)} Mersenne numbers ===")

    failures = 0
    t0 = time.time()
    for p in exponents:
        M = 2**p - 1
        ll = is_mersenne_prime(M)
        mr = is_prime(M, reps)
        if ll != mr:
            failures += 1
        if verbose:
            status = "✓" if ll == mr else f"✗ (Miller-Rabin says {mr})"
            print(f"  2^{p} - 1: {'prime' if ll else 'composite'} {status}")
    elapsed = time.time() - t0

    return _summary('mersenne', len(exponents), failures, elapsed)


def run_all_checks(config: Dict[str, Any], verbose: bool = True) -> pd.DataFrame:
    """
    Run every check with the given runner configuration.

    Returns
    -------
    pd.DataFrame
        One row per check: check, passed, cases, failures, seconds.
    """
    # The is_prime comparison is per value, so the mask check gets a slice
    mask_hi = min(config['sieve_hi'], config['sieve_lo'] + 100_000)
    rows = [
        verify_sieve(config['sieve_lo'], config['sieve_hi'], verbose),
        verify_mask(config['sieve_lo'], mask_hi, verbose),
        verify_factorization(config['factor_samples'], config['factor_bits'],
                             config['seed'], verbose),
        verify_search(config['search_samples'], config['seed'], verbose),
        verify_mersenne(config['mersenne_exponents'], config['reps'], verbose),
    ]
    return pd.DataFrame(rows, columns=['check', 'passed', 'cases', 'failures', 'seconds'])
