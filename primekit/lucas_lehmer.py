"""
Lucas-Lehmer style tests for numbers of the form k * 2**n - 1.

These are deterministic certificates, unlike is_prime for large inputs.
"""

import operator
from typing import Optional

from primekit.errors import PrimeDomainError, UnsupportedFormError
from primekit.primality import is_prime


def ll_primecheck(X: int, s: int = 4, exponent: Optional[int] = None) -> bool:
    """
    Run the Lucas-Lehmer iteration S -> S^2 - 2 (mod X).

    Parameters
    ----------
    X : int
        Candidate k * 2**n - 1, X >= 7.
    s : int
        Seed (4 for Mersenne numbers).
    exponent : int, optional
        n; defaults to the bit length of X, which is n when k == 1.

    Returns
    -------
    bool
        True iff the residue after n - 2 squarings is 0.
    """
    X = operator.index(X)
    if X < 7:
        raise PrimeDomainError(f"X must be >= 7, got {X}", X)
    n = X.bit_length() if exponent is None else operator.index(exponent)

    S = s % X
    for _ in range(n - 2):
        S = (S * S - 2) % X
    return S == 0


def is_mersenne_prime(M: int, check: bool = True) -> bool:
    """
    Lucas-Lehmer test for a Mersenne number M = 2**p - 1, p prime.

    Parameters
    ----------
    M : int
        Mersenne number.
    check : bool
        Validate that M really is 2**p - 1 with p prime. Turn off only when
        the caller guarantees it. Every bit of M must be set, which is
        stricter than a prime bit length alone: 25 has bit length 5 and is
        rejected.

    Returns
    -------
    bool
        True if M is prime.
    """
    M = operator.index(M)
    if check:
        p = M.bit_length()
        if M < 0 or M & (M + 1) != 0 or not is_prime(p):
            raise PrimeDomainError(f"{M} is not a Mersenne number 2**p - 1 with p prime", M)
    if M < 7:
        return M == 3
    return ll_primecheck(M)


def is_riesel_prime(k: int, Q: int) -> bool:
    """
    Lucas-Lehmer-Riesel test for N = k * 2**n - 1, given Q = 2**n - 1.

    Supported forms (seed in brackets):
    - k == 1, n odd: Mersenne, [3] if n % 4 == 3 else [4]
    - k == 3, n % 4 in (0, 3): [5778]

    Parameters
    ----------
    k : int
        Multiplier, 0 < k < Q.
    Q : int
        2**n - 1.

    Returns
    -------
    bool
        True if N is prime.
    """
    k = operator.index(k)
    Q = operator.index(Q)
    if not 0 < k < Q:
        raise PrimeDomainError(f"0 < k < Q must hold, got k={k}, Q={Q}", k, Q)
    if Q & (Q + 1) != 0:
        raise PrimeDomainError(f"Q must be of the form 2**n - 1, got {Q}", Q)

    n = Q.bit_length()
    if k == 1 and n % 2 == 1:
        return ll_primecheck(Q, 3 if n % 4 == 3 else 4)
    if k == 3 and n % 4 in (0, 3):
        return ll_primecheck(k * (Q + 1) - 1, 5778, exponent=n)
    # TODO: general seeds for k % 6 in (1, 5) via the Rodseth V-sequence
    raise UnsupportedFormError(
        f"Lucas-Lehmer-Riesel test not implemented for k={k}, n={n}", k, n
    )
