"""Console configuration and theme for likely output.

This module provides the central console instance and theme used for
logging and table rendering.
"""

from rich.console import Console
from rich.theme import Theme

from likely import __version__

LIKELY_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        # --- UI Structure ---
        "header": "bold cyan",
        "subheader": "bold white",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "number": "green",
        # --- Parameter states ---
        "floating": "green",
        "fixed": "yellow",
        "dim": "dim",
    }
)

# Single console instance for entire library
console = Console(theme=LIKELY_THEME)

VERSION = __version__

__all__ = ["LIKELY_THEME", "VERSION", "console"]
