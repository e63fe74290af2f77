"""Logging configuration for likely.

Library modules log through loggers under the ``likely`` namespace and never
configure handlers themselves. Applications call setup_logging() to route
those messages to a file and, optionally, to the rich console.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from likely.core.shared.constants import LOGGER_NAME
from likely.ui.console import VERSION, console

# Module-level logger (configured by setup_logging)
_logger: logging.Logger | None = None


class JSONFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    level: int = logging.INFO,
    json_format: bool | None = None,
) -> logging.Logger | None:
    """Configure the ``likely`` logger.

    Args:
        log_file: Path to log file. If None, only the console handler (when
            verbose) is installed.
        verbose: If True, also show log messages in the console
        level: Logging level (default: INFO)
        json_format: Write JSON records; defaults to True for '.json' files

    Returns
    -------
        The configured logger, or None when neither a file nor the console
        receives messages.
    """
    global _logger  # noqa: PLW0603

    if log_file is None and not verbose:
        _logger = None
        return None

    _logger = logging.getLogger(LOGGER_NAME)
    _logger.setLevel(level)
    for handler in _logger.handlers[:]:
        handler.close()
        _logger.removeHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)

        if json_format is None:
            json_format = log_file.suffix == ".json"
        if json_format:
            file_formatter: logging.Formatter = JSONFormatter()
        else:
            file_formatter = logging.Formatter(
                "%(asctime)s | %(levelname)-5s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        file_handler.setFormatter(file_formatter)
        _logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.setLevel(level)
        _logger.addHandler(console_handler)

    _logger.info("likely v%s - Session Started", VERSION)
    _logger.info("Python: %s | Platform: %s", sys.version.split()[0], sys.platform)
    return _logger


def close_logging() -> None:
    """Close logging and release handlers."""
    global _logger  # noqa: PLW0603

    if _logger is None:
        return

    _logger.info("likely session completed")

    for handler in _logger.handlers[:]:
        handler.close()
        _logger.removeHandler(handler)
    _logger = None


__all__ = [
    "JSONFormatter",
    "close_logging",
    "setup_logging",
]
