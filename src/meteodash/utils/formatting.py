"""Text and number formatting utilities."""

from __future__ import annotations

import math
from typing import Final

PLACEHOLDER: Final = "—"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's ``round`` uses banker's rounding (``round(0.5) == 0``), which
    is not what people expect to see on a weather display.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def is_missing(value: float | None) -> bool:
    """True for ``None``, NaN and infinities."""
    return value is None or not math.isfinite(value)


def format_rounded(value: float | None, suffix: str = "") -> str:
    """Format a measurement as a rounded integer with a unit suffix.

    Args:
        value: Measurement, possibly missing
        suffix: Unit text appended verbatim (e.g. "%", " km/h")

    Returns:
        Formatted string, or the placeholder dash when the value is missing
    """
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    return f"{round_half_away(value)}{suffix}"
