"""Shared foundational utilities for likely."""

from likely.core.shared import constants, formatting, typing
from likely.core.shared.exceptions import (
    InternalError,
    InvalidArgumentError,
    InvalidCovarianceError,
    InvalidShapeError,
    LikelyError,
    MissingCovarianceError,
)

__all__ = [
    "InternalError",
    "InvalidArgumentError",
    "InvalidCovarianceError",
    "InvalidShapeError",
    "LikelyError",
    "MissingCovarianceError",
    "constants",
    "formatting",
    "typing",
]
