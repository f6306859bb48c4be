"""
Stepping searches for primes near a start value.

Thin loops over is_prime. For n >= 2**64 the answers are probable primes,
since is_prime is probabilistic there.
"""

import operator
from itertools import islice
from typing import Iterator, List, Optional, Union

from primekit.errors import NoPrimeError, PrimeDomainError
from primekit.primality import is_prime


def _check_stride(stride: int) -> int:
    stride = operator.index(stride)
    if stride < 1:
        raise PrimeDomainError(f"stride must be >= 1, got {stride}", stride)
    return stride


def next_prime(n: int, i: int = 1, stride: int = 1) -> int:
    """
    The i-th prime >= n among n, n + stride, n + 2*stride, ...

    next_prime(p) == p when p is prime. i < 0 means prev_prime(n, -i, stride).

    Parameters
    ----------
    n : int
        Start value.
    i : int
        Which prime to return (1 = first), nonzero.
    stride : int
        Step between candidates, >= 1.

    Returns
    -------
    int
        The prime found.
    """
    n = operator.index(n)
    i = operator.index(i)
    if i == 0:
        raise PrimeDomainError("i must be nonzero", i)
    if i < 0:
        return prev_prime(n, -i, stride)
    stride = _check_stride(stride)

    if n < 2:
        # Smallest value >= 2 congruent to n modulo stride
        n = 2 if stride == 1 else n + stride * (1 + (n - 1) // -stride)

    start = n
    if n == 2:
        if i <= 1:
            return n
        n += stride
        i -= 1
    elif n % 2 == 0:
        n += stride

    if n % 2 == 0:
        raise PrimeDomainError(
            f"n and stride are both even (n={start}, stride={stride}): no prime can follow",
            start, stride,
        )
    # Only odd candidates from here on
    if stride % 2 == 1:
        stride *= 2

    while True:
        while not is_prime(n):
            n += stride
        i -= 1
        if i <= 0:
            return n
        n += stride


def prev_prime(n: int, i: int = 1, stride: int = 1) -> int:
    """
    The i-th prime <= n among n, n - stride, n - 2*stride, ...

    prev_prime(p) == p when p is prime. i <= 0 means next_prime(n, -i, stride).

    Raises
    ------
    NoPrimeError
        If the descent passes below 2.
    """
    n = operator.index(n)
    i = operator.index(i)
    if i <= 0:
        return next_prime(n, -i, stride)
    stride = _check_stride(stride)

    def decrement(m):
        m -= stride
        # Skip even candidates other than 2
        if m % 2 == 0 and m != 2:
            m -= stride
        return m

    while True:
        while not is_prime(n):
            if n < 2:
                raise NoPrimeError(f"There is no prime less than or equal to {n}")
            n = decrement(n)
        i -= 1
        if i <= 0:
            return n
        n = decrement(n)


def prime_at(i: int) -> int:
    """The i-th prime, 1-indexed: prime_at(1) == 2."""
    i = operator.index(i)
    if i <= 0:
        raise PrimeDomainError(f"i must be >= 1, got {i}", i)
    return next_prime(2, i)


def _ascending(state: int) -> Iterator[int]:
    while True:
        p = next_prime(state)
        yield p
        state = p + 1


def _descending(state: int) -> Iterator[int]:
    while state != 1:
        p = prev_prime(state)
        yield p
        state = p - 1


def _take(primes: Iterator[int], n: Optional[int]) -> Union[Iterator[int], List[int]]:
    if n is None:
        return primes
    n = operator.index(n)
    if n < 0:
        raise PrimeDomainError(f"n must be >= 0, got {n}", n)
    return list(islice(primes, n))


def next_primes(start: int = 1, n: Optional[int] = None) -> Union[Iterator[int], List[int]]:
    """
    Primes >= start, ascending.

    Without n the result is an iterator that never terminates on its own:
    bound it, e.g. itertools.islice(next_primes(10), 3).

    Parameters
    ----------
    start : int
        Start value.
    n : int, optional
        How many primes to return, as a list.

    Returns
    -------
    iterator or list
        next_primes(10, 3) == [11, 13, 17].
    """
    return _take(_ascending(operator.index(start)), n)


def prev_primes(start: int, n: Optional[int] = None) -> Union[Iterator[int], List[int]]:
    """
    Primes <= start, descending, ending with 2.

    With n, a list of at most n primes: prev_primes(10, 10) == [7, 5, 3, 2].
    """
    return _take(_descending(max(1, operator.index(start))), n)
