class ShorError(Exception):
    """Base class for errors raised by the factoring procedure."""


class InvalidInputError(ShorError, ValueError):
    """The modulus cannot be factored by order finding.

    Raised when `N` is too small, a prime power, or prime.
    """


class OracleFailureError(ShorError, RuntimeError):
    """The phase-estimation oracle did not produce a usable outcome."""


class NoFactorFoundError(ShorError, RuntimeError):
    """No factor was found within the allowed number of witnesses."""
