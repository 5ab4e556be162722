"""Exceptions raised by the Euler-angle conversions."""


class EulerAnglesError(ValueError):
    """Base class for all errors raised by :mod:`eulerangles`."""


class InvalidDimensionError(EulerAnglesError):
    """Raised when a dimension or angle count has no valid orthogonal size.

    Examples are a random angle set requested for ``n < 2``, or a flat angle
    vector whose length is not a triangular number ``n (n - 1) / 2``.
    """


class PreconditionViolationError(EulerAnglesError):
    """Raised when a matrix does not have unit-norm columns."""
