"""Domain configuration models."""

from likely.core.domain.config import LikelyConfig, LoggingConfig, OutputConfig, RandomConfig

__all__ = ["LikelyConfig", "LoggingConfig", "OutputConfig", "RandomConfig"]
