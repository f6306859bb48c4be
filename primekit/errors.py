"""
Exception types.

Responsibility: one place for every error the kernel raises, so callers can
tell a bad argument apart from a question that has no answer.
"""


class PrimeKitError(Exception):
    """Base class for all primekit errors."""


class PrimeDomainError(PrimeKitError, ValueError):
    """
    An argument violates a precondition.

    The offending values are kept in ``values`` so callers do not have to
    parse the message.
    """

    def __init__(self, message: str, *values):
        super().__init__(message)
        self.values = values


class UnsupportedFormError(PrimeDomainError):
    """The Lucas-Lehmer-Riesel test is not implemented for this (k, n)."""


class NoPrimeError(PrimeKitError, LookupError):
    """The arguments are valid but no prime satisfies the request."""
