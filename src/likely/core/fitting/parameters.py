"""Fit parameter descriptors and bulk queries on parameter lists."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

import numpy as np

from likely.core.shared.exceptions import InvalidArgumentError, InvalidShapeError
from likely.core.shared.formatting import resolve_number_format

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from likely.core.shared.typing import FloatArray


class ParameterStatus(str, Enum):
    """Fit state of a parameter, as encoded by the sign of its error."""

    FLOATING = "floating"  # error > 0
    TEMPORARILY_FIXED = "temporarily_fixed"  # error < 0, release() restores it
    PERMANENTLY_FIXED = "permanently_fixed"  # error == 0


class FitParameter(BaseModel):
    """A named scalar fit parameter with a value and a signed error.

    The magnitude of the error is the estimated one-sigma uncertainty and
    its sign encodes the parameter state: positive for floating, negative
    for temporarily fixed and zero for permanently fixed. Use fix() and
    release() to toggle a floating parameter without losing its error.

    Construction (positional or through model_validate) rejects a negative
    error. model_copy(update=...) skips validation, so change copies through
    set_value(), set_error(), fix() and release() instead.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, frozen=True)
    value: float = Field(allow_inf_nan=False)
    error: float = Field(default=0.0, allow_inf_nan=False)

    def __init__(self, name: str, value: float, error: float = 0.0, **data: Any) -> None:
        if not error >= 0:
            msg = f"FitParameter {name}: error must be >= 0 (got {error})"
            raise InvalidArgumentError(msg)
        super().__init__(name=name, value=value, error=error, **data)

    def __repr__(self) -> str:
        """Return a string representation of the parameter."""
        return (
            f"<FitParameter {self.name}={self.value:.6g} "
            f"± {self.error_magnitude:.3g} ({self.status.value})>"
        )

    def set_value(self, value: float) -> FitParameter:
        """Set a new value for this parameter."""
        if not math.isfinite(value):
            msg = f"FitParameter {self.name}: value must be finite (got {value})"
            raise InvalidArgumentError(msg)
        self.value = float(value)
        return self

    def set_error(self, error: float) -> FitParameter:
        """Set a new error; zero permanently fixes the parameter.

        Use fix() to temporarily fix a parameter so that release() can
        restore its original error.
        """
        if not error >= 0:
            msg = f"FitParameter {self.name}: error must be >= 0 (got {error})"
            raise InvalidArgumentError(msg)
        self.error = float(error)
        return self

    def fix(self) -> FitParameter:
        """Temporarily fix a floating parameter."""
        if self.error > 0:
            self.error = -self.error
        return self

    def release(self) -> FitParameter:
        """Release a temporarily fixed parameter."""
        if self.error < 0:
            self.error = -self.error
        return self

    def is_floating(self) -> bool:
        """Return True if this parameter is floating (error > 0)."""
        return self.error > 0

    @property
    def status(self) -> ParameterStatus:
        """Parameter state decoded from the error sign."""
        if self.error > 0:
            return ParameterStatus.FLOATING
        if self.error < 0:
            return ParameterStatus.TEMPORARILY_FIXED
        return ParameterStatus.PERMANENTLY_FIXED

    @property
    def error_magnitude(self) -> float:
        """Estimated one-sigma uncertainty, independent of state."""
        return abs(self.error)


# Ordered list of parameters; position is meaningful, names are not checked for uniqueness
FitParameters = list[FitParameter]


def _select(parameters: Sequence[FitParameter], only_floating: bool) -> list[FitParameter]:
    if only_floating:
        return [param for param in parameters if param.is_floating()]
    return list(parameters)


def get_fit_parameter_values(
    parameters: Sequence[FitParameter], only_floating: bool = False
) -> FloatArray:
    """Get parameter values as an array, in input order."""
    return np.array([param.value for param in _select(parameters, only_floating)], dtype=float)


def get_fit_parameter_errors(
    parameters: Sequence[FitParameter], only_floating: bool = False
) -> FloatArray:
    """Get parameter error magnitudes as an array, in input order.

    Errors are reported as absolute values; the sign only encodes state.
    """
    return np.array(
        [param.error_magnitude for param in _select(parameters, only_floating)], dtype=float
    )


def get_fit_parameter_names(
    parameters: Sequence[FitParameter], only_floating: bool = False
) -> list[str]:
    """Get parameter names, in input order."""
    return [param.name for param in _select(parameters, only_floating)]


def count_floating_fit_parameters(parameters: Sequence[FitParameter]) -> int:
    """Count parameters with error > 0."""
    return sum(1 for param in parameters if param.is_floating())


def find_fit_parameter_by_name(parameters: Sequence[FitParameter], name: str) -> int:
    """Return the index of the first parameter called name, or -1."""
    for index, param in enumerate(parameters):
        if param.name == name:
            return index
    return -1


def set_floating_values(parameters: Sequence[FitParameter], values: ArrayLike) -> None:
    """Set values of floating parameters from an array, in order."""
    floating = _select(parameters, only_floating=True)
    values = np.asarray(values, dtype=float).ravel()
    if values.size != len(floating):
        msg = f"Got {values.size} values for {len(floating)} floating parameters"
        raise InvalidShapeError(msg)
    for param, value in zip(floating, values, strict=True):
        param.set_value(float(value))


def set_floating_errors(parameters: Sequence[FitParameter], errors: ArrayLike) -> None:
    """Set errors of floating parameters from an array, in order.

    Every error must be > 0 so that the parameters remain floating.
    """
    floating = _select(parameters, only_floating=True)
    errors = np.asarray(errors, dtype=float).ravel()
    if errors.size != len(floating):
        msg = f"Got {errors.size} errors for {len(floating)} floating parameters"
        raise InvalidShapeError(msg)
    if np.any(~(errors > 0)):
        msg = "Errors of floating parameters must be > 0"
        raise InvalidArgumentError(msg)
    for param, error in zip(floating, errors, strict=True):
        param.set_error(float(error))


def format_fit_parameters(
    parameters: Sequence[FitParameter], number_format: str | None = None
) -> str:
    """Get a formatted summary of all parameters."""
    number_format = resolve_number_format(number_format)
    lines = ["Parameters:", "=" * 60]
    for param in parameters:
        value = format(param.value, number_format)
        error = format(param.error_magnitude, number_format)
        lines.append(f"  {param.name:20s} = {value:>12s} ± {error:<12s} ({param.status.value})")
    lines.append("=" * 60)
    return "\n".join(lines)


__all__ = [
    "FitParameter",
    "FitParameters",
    "ParameterStatus",
    "count_floating_fit_parameters",
    "find_fit_parameter_by_name",
    "format_fit_parameters",
    "get_fit_parameter_errors",
    "get_fit_parameter_names",
    "get_fit_parameter_values",
    "set_floating_errors",
    "set_floating_values",
]
