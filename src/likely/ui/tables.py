"""Rich tables for fit parameters and function minima."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from likely.core.shared.formatting import resolve_number_format

from .console import console

if TYPE_CHECKING:
    from likely.core.fitting.minimum import FunctionMinimum
    from likely.core.fitting.parameters import FitParameter

__all__ = [
    "create_table",
    "fit_parameters_table",
    "minimum_table",
    "print_minimum",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling."""
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def fit_parameters_table(
    parameters: Sequence[FitParameter],
    number_format: str | None = None,
    title: str = "Fit Parameters",
) -> Table:
    """Build a table listing each parameter's value, error and state."""
    number_format = resolve_number_format(number_format)
    table = create_table(title)
    table.add_column("Name", style="key")
    table.add_column("Value", style="number", justify="right")
    table.add_column("Error", style="number", justify="right")
    table.add_column("State")

    for param in parameters:
        state_style = "floating" if param.is_floating() else "fixed"
        table.add_row(
            param.name,
            format(param.value, number_format),
            format(param.error_magnitude, number_format),
            f"[{state_style}]{param.status.value}[/{state_style}]",
        )
    return table


def minimum_table(
    minimum: FunctionMinimum,
    names: Sequence[str] | None = None,
    number_format: str | None = None,
) -> Table:
    """Build a table of the point and errors of a function minimum.

    Args:
        minimum: Minimum to display
        names: Parameter names, positionally matched to the minimum's point
        number_format: Python format spec applied to every number
    """
    number_format = resolve_number_format(number_format)
    where = minimum.where
    if names is None:
        names = [f"p{index}" for index in range(where.size)]
    if len(names) != where.size:
        msg = f"Got {len(names)} names for {where.size} parameters"
        raise ValueError(msg)

    title = f"F = {format(minimum.min_value, number_format)}"
    table = create_table(title)
    table.add_column("Parameter", style="key")
    table.add_column("Value", style="number", justify="right")
    errors = minimum.get_errors() if minimum.have_covariance() else None
    if errors is not None:
        table.add_column("Error", style="number", justify="right")

    for index, name in enumerate(names):
        row = [name, format(float(where[index]), number_format)]
        if errors is not None:
            row.append(format(float(errors[index]), number_format))
        table.add_row(*row)
    return table


def print_minimum(
    minimum: FunctionMinimum,
    names: Sequence[str] | None = None,
    number_format: str | None = None,
) -> None:
    """Print a function minimum table to the shared console."""
    console.print(minimum_table(minimum, names, number_format))
