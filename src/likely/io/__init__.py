"""Configuration file I/O."""

from likely.io.config import apply_config, generate_default_config, load_config, save_config

__all__ = ["apply_config", "generate_default_config", "load_config", "save_config"]
