"""Jinja2 filters available to digest templates."""

from typing import Final


THIN_SPACE: Final[str] = "\u2009"


def format_number(value: object) -> str:
    """Group an integer's digits by thousands with thin spaces.

    ``1234567`` becomes ``"1 234 567"`` (separated by U+2009).

    Args:
        value: Integer to format.

    Returns:
        Formatted number.

    Raises:
        TypeError: If the value is not an integer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Argument is not a number: {value!r}")
    return f"{value:,}".replace(",", THIN_SPACE)
