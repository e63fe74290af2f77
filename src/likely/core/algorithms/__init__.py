"""Numerical routines on packed symmetric matrices."""

from likely.core.algorithms.linear_algebra import (
    cholesky_decompose,
    pack_symmetric,
    packed_diagonal_indices,
    packed_dimension,
    packed_index,
    packed_row_column_indices,
    packed_size,
    unpack_symmetric,
    unpack_upper,
)

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
