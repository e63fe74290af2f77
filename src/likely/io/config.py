"""Configuration file loading, saving and application."""

import logging
import tomllib
from pathlib import Path

import tomli_w

from likely.core.domain.config import LikelyConfig
from likely.core.random import Random
from likely.core.shared.formatting import set_number_format
from likely.ui.logging import setup_logging


def load_config(path: Path) -> LikelyConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        LikelyConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        data = tomllib.load(f)

    return LikelyConfig.model_validate(data)


def save_config(config: LikelyConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)


def apply_config(config: LikelyConfig, random: Random | None = None) -> None:
    """Apply a configuration to the running process.

    Seeds the random source (the shared instance by default) when a seed is
    configured, installs the default number format used by text renderings,
    then sets up logging.
    """
    if config.random.seed is not None:
        (random if random is not None else Random.instance()).set_seed(config.random.seed)

    set_number_format(config.output.number_format)

    setup_logging(
        log_file=config.logging.log_file,
        verbose=config.logging.verbose,
        level=getattr(logging, config.logging.level),
        json_format=config.logging.format == "json",
    )


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# likely Configuration File
# Generated automatically - edit as needed

[random]
# seed = 1234  # Uncomment for reproducible random parameter draws

[output]
number_format = ".6g"  # Python format spec for printed numbers

[logging]
level = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
format = "text"  # text or json
verbose = false
# log_file = "likely.log"  # Uncomment to write a log file
"""
