"""
Tests for is_prime and its Miller-Rabin witness selection.
"""

import numpy as np
import pytest

from primekit.errors import PrimeDomainError
from primekit.primality import BASES, is_prime, miller_rabin, witnesses
from primekit.verify import prime_flags_upto

# Strong pseudoprimes to the listed prime bases (all composite)
STRONG_PSEUDOPRIMES = [
    2047,                   # base 2
    1373653,                # bases 2, 3
    25326001,               # bases 2, 3, 5
    3215031751,             # bases 2, 3, 5, 7
    2152302898747,          # bases 2, 3, 5, 7, 11
    3474749660383,          # bases 2, 3, 5, 7, 11, 13
    341550071728321,        # bases 2 .. 17
    3825123056546413051,    # bases 2 .. 23
]

CARMICHAEL = [561, 1105, 1729, 2465, 2821, 6601, 8911, 41041, 825265, 321197185]


class TestSmallInputs:
    """Test the total-function contract on edge inputs."""

    def test_known_values(self):
        """Spot checks."""
        assert is_prime(97)
        assert is_prime(2)
        assert is_prime(3)
        assert not is_prime(1)
        assert not is_prime(4)

    def test_zero_and_negative(self):
        """Zero and negatives are never prime and never raise."""
        for n in [0, -1, -2, -3, -97, -(2**64)]:
            assert not is_prime(n), f"is_prime({n}) should be False"

    def test_matches_plain_sieve(self):
        """Agrees with the Sieve of Eratosthenes below 200000 (table and Miller-Rabin paths)."""
        N = 200000
        flags = prime_flags_upto(N)
        for n in range(N + 1):
            assert is_prime(n) == flags[n], f"is_prime({n})"


class TestLargeInputs:
    """Test the deterministic and probabilistic Miller-Rabin paths."""

    def test_strong_pseudoprimes_are_composite(self):
        """Numbers that fool small fixed base sets are still rejected."""
        for n in STRONG_PSEUDOPRIMES:
            assert not is_prime(n), f"{n} is composite"

    def test_carmichael_numbers_are_composite(self):
        """Carmichael numbers are rejected."""
        for n in CARMICHAEL:
            assert not is_prime(n), f"{n} is composite"

    def test_known_large_primes(self):
        """Primes near the 32- and 64-bit boundaries and beyond."""
        for p in [4294967291, 4294967311, 2**61 - 1, 2**64 - 59, 2**89 - 1, 2**127 - 1]:
            assert is_prime(p), f"{p} is prime"

    def test_products_of_large_primes(self):
        """Semiprimes with no small factor are rejected."""
        assert not is_prime((2**31 - 1) * (2**61 - 1))
        assert not is_prime((2**61 - 1) * (2**89 - 1))
        assert not is_prime(4294967291 * 4294967311)

    def test_reps_parameter(self):
        """reps only matters above 2**64 and must be positive."""
        assert is_prime(2**127 - 1, reps=1)
        assert is_prime(2**61 - 1, reps=1)
        with pytest.raises(PrimeDomainError):
            is_prime(97, reps=0)

    def test_fixed_bases_above_2_64(self):
        """
        True above 2**64 means a strong probable prime to the first reps primes.

        Every composite 2**p - 1 with p prime is a strong pseudoprime to base 2,
        so with reps=1 the composite 2**67 - 1 = 193707721 * 761838257287 is
        accepted, and accepted every time. More bases reject it.
        """
        M67 = 2**67 - 1
        assert M67 == 193707721 * 761838257287
        assert witnesses(M67, reps=1) == (2,)
        assert is_prime(M67, reps=1)
        assert is_prime(M67, reps=1)
        assert not is_prime(M67)

    def test_numpy_integers(self):
        """NumPy scalars are widened to Python ints."""
        assert is_prime(np.int64(97))
        assert is_prime(np.uint64(2**64 - 59))
        assert not is_prime(np.int32(-7))

    def test_rejects_non_integers(self):
        """Floats are not integers."""
        with pytest.raises(TypeError):
            is_prime(7.0)


class TestWitnesses:
    """Test witness selection by magnitude."""

    def test_hashed_base_below_2_32(self):
        """One base from the hashed table."""
        for n in [65537, 1000003, 4294967291]:
            bases = witnesses(n)
            assert len(bases) == 1
            assert bases[0] in BASES

    def test_fixed_sets(self):
        """Fixed base sets between 2**32 and 2**64."""
        assert witnesses(2**32 + 15) == (2, 3, 5, 7, 11)
        assert witnesses(2152302898747) == (2, 3, 5, 7, 11, 13)
        assert witnesses(2**64 - 59) == (2, 325, 9375, 28178, 450775, 9780504, 1795265022)

    def test_first_primes_above_2_64(self):
        """reps bases, the first reps primes."""
        assert witnesses(2**89 - 1, reps=5) == (2, 3, 5, 7, 11)
        assert len(witnesses(2**89 - 1)) == 25
        assert witnesses(2**89 - 1)[-1] == 97
        bases = witnesses(2**89 - 1, reps=30)
        assert len(bases) == 30
        assert bases[-1] == 113

    def test_deterministic(self):
        """The same n always gets the same bases."""
        assert witnesses(1000003) == witnesses(1000003)

    def test_table_size(self):
        """256 hashed bases."""
        assert len(BASES) == 256


class TestMillerRabin:
    """Test single rounds."""

    def test_strong_pseudoprime_to_base_2(self):
        """2047 = 23 * 89 passes base 2 and fails base 3."""
        assert miller_rabin(2047, (2,))
        assert not miller_rabin(2047, (3,))

    def test_prime_passes_every_base(self):
        """A prime is a strong probable prime to any base."""
        assert miller_rabin(65537, range(2, 200))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
