"""Fit parameters and function minima."""

from likely.core.fitting.minimum import CovarianceFactorization, FunctionMinimum
from likely.core.fitting.parameters import (
    FitParameter,
    FitParameters,
    ParameterStatus,
    count_floating_fit_parameters,
    find_fit_parameter_by_name,
    format_fit_parameters,
    get_fit_parameter_errors,
    get_fit_parameter_names,
    get_fit_parameter_values,
    set_floating_errors,
    set_floating_values,
)

__all__ = [
    "CovarianceFactorization",
    "FitParameter",
    "FitParameters",
    "FunctionMinimum",
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
