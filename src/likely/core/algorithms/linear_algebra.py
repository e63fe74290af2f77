"""Packed symmetric matrix storage and Cholesky decomposition.

A symmetric n x n matrix is stored as its upper triangle in column-major
packed order: element (i, j) with i <= j lives at offset i + j*(j+1)/2.
This is the LAPACK 'U' packed layout, so a packed covariance can be handed
to a packed Cholesky routine without reordering.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import TYPE_CHECKING

import numpy as np
from scipy.linalg import LinAlgError, cholesky

from likely.core.shared.exceptions import InternalError, InvalidShapeError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from likely.core.shared.typing import FloatArray, IntArray

logger = logging.getLogger(__name__)


def packed_size(n: int) -> int:
    """Return the packed length n*(n+1)/2 of an n x n symmetric matrix."""
    return n * (n + 1) // 2


def packed_dimension(length: int) -> int:
    """Return n such that length == n*(n+1)/2.

    Raises
    ------
        InternalError: If length is not a triangular number.
    """
    n = (math.isqrt(8 * length + 1) - 1) // 2 if length >= 0 else -1
    if n < 0 or packed_size(n) != length:
        msg = f"Packed length {length} does not correspond to a square matrix"
        raise InternalError(msg)
    return n


def packed_index(i: int, j: int) -> int:
    """Return the packed offset of element (i, j), in either order."""
    if i > j:
        i, j = j, i
    return i + j * (j + 1) // 2


@lru_cache(maxsize=64)
def _packed_order(n: int) -> tuple[IntArray, IntArray]:
    # Row and column indices visited in packed storage order
    cols, rows = np.tril_indices(n)
    rows.flags.writeable = False
    cols.flags.writeable = False
    return rows, cols


def packed_row_column_indices(n: int) -> tuple[IntArray, IntArray]:
    """Return (rows, cols) index arrays listing the upper triangle in packed order."""
    return _packed_order(n)


def packed_diagonal_indices(n: int) -> IntArray:
    """Return the packed offsets i*(i+3)/2 of the diagonal elements."""
    i = np.arange(n)
    return i * (i + 3) // 2


def pack_symmetric(matrix: ArrayLike) -> FloatArray:
    """Pack the upper triangle of a square matrix.

    Only the upper triangle is read; the lower triangle is ignored.

    Raises
    ------
        InvalidShapeError: If the input is not a square 2-D array.
    """
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        msg = f"Expected a square matrix, got shape {matrix.shape}"
        raise InvalidShapeError(msg)
    rows, cols = _packed_order(matrix.shape[0])
    return matrix[rows, cols].copy()


def unpack_upper(packed: ArrayLike) -> FloatArray:
    """Expand packed storage into an upper-triangular matrix (zeros below)."""
    packed = np.asarray(packed, dtype=float)
    n = packed_dimension(packed.size)
    rows, cols = _packed_order(n)
    matrix = np.zeros((n, n))
    matrix[rows, cols] = packed
    return matrix


def unpack_symmetric(packed: ArrayLike) -> FloatArray:
    """Expand packed storage into the full symmetric matrix."""
    packed = np.asarray(packed, dtype=float)
    n = packed_dimension(packed.size)
    rows, cols = _packed_order(n)
    matrix = np.zeros((n, n))
    matrix[rows, cols] = packed
    matrix[cols, rows] = packed
    return matrix


def cholesky_decompose(covar: ArrayLike) -> FloatArray | None:
    """Compute the packed upper Cholesky factor U of a packed covariance.

    The factor satisfies U.T @ U == C. The input is never modified.

    Args:
        covar: Packed symmetric matrix of length n*(n+1)/2

    Returns
    -------
        Packed upper-triangular factor, or None if the matrix is not
        positive definite (including non-finite entries).

    Raises
    ------
        InternalError: If the packed length is not triangular.
    """
    packed = np.array(covar, dtype=float).ravel()
    n = packed_dimension(packed.size)
    if not np.all(np.isfinite(packed)):
        logger.debug("Cholesky decomposition skipped: non-finite covariance entries")
        return None
    if n == 0:
        return packed

    try:
        factor = cholesky(unpack_symmetric(packed), lower=False, check_finite=False)
    except LinAlgError as exc:
        logger.debug("Cholesky decomposition failed for n=%d: %s", n, exc)
        return None

    return pack_symmetric(factor)


__all__ = [
    "cholesky_decompose",
    "pack_symmetric",
    "packed_diagonal_indices",
    "packed_dimension",
    "packed_index",
    "packed_row_column_indices",
    "packed_size",
    "unpack_symmetric",
    "unpack_upper",
]
