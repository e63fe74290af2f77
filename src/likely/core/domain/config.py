"""Configuration models for likely."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from likely.core.shared.constants import DEFAULT_NUMBER_FORMAT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["text", "json"]


class RandomConfig(BaseModel):
    """Configuration of the shared random number source."""

    model_config = ConfigDict(extra="forbid")

    seed: Annotated[int, Field(ge=0)] | None = Field(
        default=None,
        description="Seed for the shared random source. If None, seeded from OS entropy.",
    )


class OutputConfig(BaseModel):
    """Configuration for text rendering of parameters and minima."""

    model_config = ConfigDict(extra="forbid")

    number_format: str = Field(
        default=DEFAULT_NUMBER_FORMAT,
        description="Python format spec applied to numbers (e.g. '.6g', '12.4f').",
    )

    @field_validator("number_format")
    @classmethod
    def validate_number_format(cls, v: str) -> str:
        """Ensure the format spec can format a float."""
        try:
            format(1.0, v)
        except (ValueError, TypeError) as exc:
            msg = f"Invalid number format {v!r}: {exc}"
            raise ValueError(msg) from exc
        return v


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = Field(default="INFO", description="Minimum level of logged messages.")
    log_file: Path | None = Field(
        default=None,
        description="Log file path. If None, file logging is disabled.",
    )
    format: LogFormat = Field(
        default="text",
        description="Format for log file: text (human-readable) or json (structured).",
    )
    verbose: bool = Field(default=False, description="Also show log messages in the console.")


class LikelyConfig(BaseModel):
    """Top-level likely configuration.

    Example TOML configuration:
        [random]
        seed = 1234

        [output]
        number_format = ".4g"

        [logging]
        level = "DEBUG"
        log_file = "likely.log"
        verbose = true
    """

    model_config = ConfigDict(extra="forbid")

    random: RandomConfig = Field(default_factory=RandomConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
