"""Package-wide constants."""

# Root of the logger hierarchy used by every module
LOGGER_NAME = "likely"

# Python format spec applied to numbers in text renderings
DEFAULT_NUMBER_FORMAT = ".6g"
