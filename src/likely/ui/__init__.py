"""Terminal output and logging setup for likely.

Submodules:
- console: Theme and console instance
- logging: Log handler configuration
- tables: Rich tables for parameters and minima
"""

from likely.ui.console import LIKELY_THEME, VERSION, console
from likely.ui.logging import close_logging, setup_logging
from likely.ui.tables import create_table, fit_parameters_table, minimum_table, print_minimum

__all__ = [
    "LIKELY_THEME",
    "VERSION",
    "close_logging",
    "console",
    "create_table",
    "fit_parameters_table",
    "minimum_table",
    "print_minimum",
    "setup_logging",
]
