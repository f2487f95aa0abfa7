"""Common utility functions and helpers for the meteodash package."""

from meteodash.utils.file import atomic_write_text, ensure_directory_exists
from meteodash.utils.formatting import PLACEHOLDER, format_rounded, round_half_away
from meteodash.utils.time import TimeUtils

__all__ = [
    "PLACEHOLDER",
    "TimeUtils",
    "atomic_write_text",
    "ensure_directory_exists",
    "format_rounded",
    "round_half_away",
]
