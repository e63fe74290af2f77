"""Process-wide default number format for text renderings."""

from likely.core.shared.constants import DEFAULT_NUMBER_FORMAT

# Global format state, replaced by set_number_format()
_number_format = DEFAULT_NUMBER_FORMAT


def set_number_format(number_format: str) -> None:
    """Set the default Python format spec used when none is passed.

    Args:
        number_format: Format spec such as '.6g' or '12.4f'

    Raises
    ------
        ValueError: If the spec cannot format a float.
    """
    global _number_format  # noqa: PLW0603
    format(1.0, number_format)
    _number_format = number_format


def get_number_format() -> str:
    """Get the default number format."""
    return _number_format


def resolve_number_format(number_format: str | None) -> str:
    """Return number_format, or the process default when it is None."""
    return _number_format if number_format is None else number_format


__all__ = ["get_number_format", "resolve_number_format", "set_number_format"]
