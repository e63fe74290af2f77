"""Function minimum with optional parameter covariance.

A FunctionMinimum stores the result of a minimization: the function value,
the point where it was found and, optionally, the covariance of the
parameters at that point. The covariance is kept in packed upper-triangular
storage together with its Cholesky factor, which is used both to validate
the covariance and to generate correlated random parameter values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

import numpy as np

from likely.core.algorithms.linear_algebra import (
    cholesky_decompose,
    packed_diagonal_indices,
    packed_dimension,
    packed_row_column_indices,
    packed_size,
    unpack_symmetric,
)
from likely.core.random import NormalSource, Random
from likely.core.shared.exceptions import (
    InvalidCovarianceError,
    InvalidShapeError,
    MissingCovarianceError,
)
from likely.core.shared.formatting import resolve_number_format

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from likely.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CovarianceFactorization:
    """Packed covariance together with its packed upper Cholesky factor.

    Attributes
    ----------
        covariance: Packed symmetric positive-definite matrix
        cholesky: Packed upper-triangular U with U.T @ U == covariance
    """

    covariance: FloatArray
    cholesky: FloatArray

    @property
    def dimension(self) -> int:
        """Number of parameters described by this covariance."""
        return packed_dimension(self.covariance.size)


class FunctionMinimum:
    """Result of a function minimization.

    Example:
        >>> fmin = FunctionMinimum(0.5, [1.0, 2.0], [0.1, 0.2], errors_only=True)
        >>> fmin.get_errors()
        array([0.1, 0.2])
    """

    def __init__(
        self,
        min_value: float,
        where: ArrayLike,
        covariance: ArrayLike | None = None,
        errors_only: bool = False,
        random: NormalSource | None = None,
    ) -> None:
        """Initialize a minimum, optionally with a covariance.

        Args:
            min_value: Function value at the minimum
            where: Parameter values at the minimum
            covariance: Packed covariance, or errors if errors_only is True
            errors_only: Interpret covariance as a vector of one-sigma errors
            random: Source of standard normals (defaults to the shared Random)

        Raises
        ------
            InvalidCovarianceError: If the covariance is not positive definite.
            InvalidShapeError: If the covariance size does not match where.
        """
        self._min_value = float(min_value)
        self._where = np.array(where, dtype=float).ravel()
        self._random = random if random is not None else Random.instance()
        self._factorization: CovarianceFactorization | None = None

        if covariance is not None and not self.update_covariance(covariance, errors_only):
            msg = "FunctionMinimum: covariance is not positive definite"
            raise InvalidCovarianceError(msg)

    def __repr__(self) -> str:
        """Return a string representation of the minimum."""
        cov_str = "with covariance" if self.have_covariance() else "no covariance"
        return (
            f"<FunctionMinimum F={self._min_value:.6g} "
            f"({self.n_parameters} parameters, {cov_str})>"
        )

    def __str__(self) -> str:
        return self.format()

    @property
    def min_value(self) -> float:
        """Function value at the minimum."""
        return self._min_value

    @property
    def where(self) -> FloatArray:
        """Copy of the parameter values at the minimum."""
        return self._where.copy()

    @property
    def n_parameters(self) -> int:
        """Number of parameters at the minimum."""
        return self._where.size

    @property
    def random(self) -> NormalSource:
        """Source of standard normals used by set_random_parameters."""
        return self._random

    def have_covariance(self) -> bool:
        """Return True if a covariance matrix is available."""
        return self._factorization is not None

    def update_parameters(self, params: ArrayLike, fval: float) -> None:
        """Replace the parameter values and function value.

        The covariance is left untouched even if it no longer describes the
        new point.
        """
        self._where = np.array(params, dtype=float).ravel()
        self._min_value = float(fval)

    def update_covariance(self, covar: ArrayLike, errors_only: bool = False) -> bool:
        """Replace the covariance if the input is valid.

        Args:
            covar: Packed covariance of length n*(n+1)/2, or n errors if
                errors_only is True
            errors_only: Build a diagonal covariance from one-sigma errors

        Returns
        -------
            True if the covariance was accepted. False if an error is <= 0 or
            not finite, or the matrix is not positive definite, in which case
            nothing changes.

        Raises
        ------
            InvalidShapeError: If the input length does not match the number
                of parameters.
        """
        values = np.array(covar, dtype=float).ravel()
        n_par = self.n_parameters

        if errors_only:
            if values.size != n_par:
                msg = (
                    "FunctionMinimum: parameter and error vectors have incompatible sizes "
                    f"({n_par} != {values.size})"
                )
                raise InvalidShapeError(msg)
            if np.any(~np.isfinite(values) | ~(values > 0)):
                logger.debug("Rejected error vector with non-positive or non-finite entries")
                return False
            diagonal = packed_diagonal_indices(n_par)
            covariance = np.zeros(packed_size(n_par))
            covariance[diagonal] = values * values
            cholesky = np.zeros(packed_size(n_par))
            cholesky[diagonal] = values
        else:
            if values.size != packed_size(n_par):
                msg = (
                    "FunctionMinimum: parameter and covariance vectors have incompatible sizes "
                    f"({packed_size(n_par)} != {values.size})"
                )
                raise InvalidShapeError(msg)
            factor = cholesky_decompose(values)
            if factor is None:
                logger.debug("Rejected covariance that is not positive definite")
                return False
            covariance = values
            cholesky = factor

        self._factorization = CovarianceFactorization(covariance=covariance, cholesky=cholesky)
        logger.debug("Accepted covariance for %d parameters", n_par)
        return True

    def _require_covariance(self, operation: str) -> CovarianceFactorization:
        if self._factorization is None:
            msg = f"FunctionMinimum.{operation}: no covariance matrix available"
            raise MissingCovarianceError(msg)
        if self._factorization.dimension != self.n_parameters:
            msg = (
                f"FunctionMinimum.{operation}: covariance describes "
                f"{self._factorization.dimension} parameters but the minimum has "
                f"{self.n_parameters}"
            )
            raise InvalidShapeError(msg)
        return self._factorization

    def get_errors(self) -> FloatArray:
        """Return the square roots of the covariance diagonal.

        Negative diagonal elements are reported as zero errors.
        """
        factorization = self._require_covariance("get_errors")
        sigsq = factorization.covariance[packed_diagonal_indices(self.n_parameters)]
        return np.sqrt(np.where(sigsq > 0, sigsq, 0.0))

    def get_covariance(self) -> FloatArray:
        """Return a copy of the packed covariance."""
        return self._require_covariance("get_covariance").covariance.copy()

    def get_covariance_matrix(self) -> FloatArray:
        """Return the full symmetric covariance matrix."""
        return unpack_symmetric(self._require_covariance("get_covariance_matrix").covariance)

    def get_cholesky(self) -> FloatArray:
        """Return a copy of the packed upper Cholesky factor."""
        return self._require_covariance("get_cholesky").cholesky.copy()

    def set_random_parameters(self, params: FloatArray) -> float:
        """Fill params with a correlated Gaussian sample around the minimum.

        The sample is where + U.T @ g, with g a vector of independent standard
        normals and U the packed Cholesky factor of the covariance, so that
        samples are distributed with the stored covariance.

        Args:
            params: Array of length n, overwritten in place

        Returns
        -------
            Negative log weight 0.5 * sum(g**2) of the generated normals
        """
        factorization = self._require_covariance("set_random_parameters")
        n_par = self.n_parameters
        if np.shape(params) != (n_par,):
            msg = f"FunctionMinimum.set_random_parameters: expected {n_par} parameters"
            raise InvalidShapeError(msg)

        gauss = np.array([self._random.normal() for _ in range(n_par)], dtype=float)

        # Single pass over the packed factor: params[j] += U[i, j] * gauss[i] for i <= j
        rows, cols = packed_row_column_indices(n_par)
        shift = np.bincount(cols, weights=factorization.cholesky * gauss[rows], minlength=n_par)
        params[:] = self._where + shift

        return 0.5 * float(gauss @ gauss)

    def get_random_parameters(self) -> tuple[FloatArray, float]:
        """Return a new correlated Gaussian sample and its negative log weight."""
        params = np.empty(self.n_parameters)
        nl_weight = self.set_random_parameters(params)
        return params, nl_weight

    def copy(self) -> FunctionMinimum:
        """Create a copy that owns its own arrays and shares the random source."""
        new = FunctionMinimum(self._min_value, self._where, random=self._random)
        if self._factorization is not None:
            new._factorization = CovarianceFactorization(
                covariance=self._factorization.covariance.copy(),
                cholesky=self._factorization.cholesky.copy(),
            )
        return new

    def format(self, number_format: str | None = None) -> str:
        """Render the point, function value, errors and covariance as text.

        Args:
            number_format: Python format spec applied to every number
                (defaults to the process-wide number format)
        """
        number_format = resolve_number_format(number_format)

        def fmt(value: float) -> str:
            return format(float(value), number_format)

        point = ",".join(fmt(value) for value in self._where)
        lines = [f"F({point}) = {fmt(self._min_value)}"]
        if self.have_covariance():
            errors = self.get_errors()
            lines.append("ERRORS:" + "".join(f" {fmt(error)}" for error in errors))
            lines.append("COVARIANCE:")
            for row in self.get_covariance_matrix():
                lines.append("".join(f" {fmt(value)}" for value in row))
        return "\n".join(lines)

    def print_to_stream(self, stream: TextIO, number_format: str | None = None) -> None:
        """Write the text rendering of this minimum to a stream."""
        stream.write(self.format(number_format))
        stream.write("\n")


__all__ = ["CovarianceFactorization", "FunctionMinimum"]
