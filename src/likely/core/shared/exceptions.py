"""Exception taxonomy for likely.

Contract violations raise one of these exceptions. Routine numerical
outcomes, such as a covariance that is not positive definite, are reported
through return values instead so that callers can test them cheaply.
"""

from __future__ import annotations


class LikelyError(Exception):
    """Base class for all likely-specific exceptions."""


class InvalidArgumentError(LikelyError, ValueError):
    """An argument has an invalid value (negative error, non-finite value)."""


class InvalidShapeError(LikelyError, ValueError):
    """Array lengths are inconsistent with the number of parameters."""


class InvalidCovarianceError(LikelyError, ValueError):
    """A covariance was rejected where no boolean result can be returned."""


class MissingCovarianceError(LikelyError, RuntimeError):
    """An operation needs a covariance matrix but none is available."""


class InternalError(LikelyError):
    """Internal consistency check failed (programmer error)."""


__all__ = [
    "InternalError",
    "InvalidArgumentError",
    "InvalidCovarianceError",
    "InvalidShapeError",
    "LikelyError",
    "MissingCovarianceError",
]
