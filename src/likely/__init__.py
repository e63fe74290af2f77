"""likely - Function minima, parameter covariances and fit parameters.

Public API:
    - FitParameter: Named parameter with a sign-encoded fit state
    - FunctionMinimum: Minimum point with optional packed covariance
    - Random: Random source shared by sampling code

Configuration:
    - LikelyConfig: Main configuration object
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from likely.core.algorithms.linear_algebra import cholesky_decompose
from likely.core.domain.config import LikelyConfig
from likely.core.fitting.minimum import FunctionMinimum
from likely.core.fitting.parameters import (
    FitParameter,
    FitParameters,
    ParameterStatus,
    count_floating_fit_parameters,
    find_fit_parameter_by_name,
    get_fit_parameter_errors,
    get_fit_parameter_names,
    get_fit_parameter_values,
)
from likely.core.random import Random
from likely.core.shared.exceptions import (
    InternalError,
    InvalidArgumentError,
    InvalidCovarianceError,
    InvalidShapeError,
    LikelyError,
    MissingCovarianceError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "FitParameter",
    "FitParameters",
    "FunctionMinimum",
    "ParameterStatus",
    "Random",
    "cholesky_decompose",
    "count_floating_fit_parameters",
    "find_fit_parameter_by_name",
    "get_fit_parameter_errors",
    "get_fit_parameter_names",
    "get_fit_parameter_values",
    # Configuration
    "LikelyConfig",
    # Errors
    "InternalError",
    "InvalidArgumentError",
    "InvalidCovarianceError",
    "InvalidShapeError",
    "LikelyError",
    "MissingCovarianceError",
]
