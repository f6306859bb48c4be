"""primekit - prime sieving, primality testing and integer factorization."""

__version__ = "0.1.0"

from primekit.errors import NoPrimeError, PrimeDomainError, PrimeKitError, UnsupportedFormError
from primekit.factorization import Factorization, each_factor, factor
from primekit.lucas_lehmer import is_mersenne_prime, is_riesel_prime
from primekit.primality import is_prime
from primekit.primes import primes, primes_mask
from primekit.search import next_prime, next_primes, prev_prime, prev_primes, prime_at

__all__ = [
    "Factorization",
    "NoPrimeError",
    "PrimeDomainError",
    "PrimeKitError",
    "UnsupportedFormError",
    "each_factor",
    "factor",
    "is_mersenne_prime",
    "is_prime",
    "is_riesel_prime",
    "next_prime",
    "next_primes",
    "prev_prime",
    "prev_primes",
    "prime_at",
    "primes",
    "primes_mask",
]
