# src/meteodash/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

from meteodash.utils.formatting import PLACEHOLDER


class TimeUtils:
    """Time-related utility functions.

    Open-Meteo reports timestamps as local wall-clock strings plus a
    separate UTC offset. These helpers turn them into aware datetimes so
    they can be compared against "now" regardless of the machine's zone.
    """

    @staticmethod
    def now_localized() -> datetime:
        """Get current datetime with local timezone.

        Returns:
            Current datetime with local timezone
        """
        return datetime.now(UTC).astimezone()

    @staticmethod
    def offset_timezone(offset_seconds: int) -> timezone:
        """Build a fixed-offset timezone from a UTC offset in seconds."""
        return timezone(timedelta(seconds=offset_seconds))

    @classmethod
    def attach_offset(cls, dt: datetime, offset_seconds: int) -> datetime:
        """Attach a fixed UTC offset to a naive local datetime.

        Aware datetimes are returned unchanged.

        Args:
            dt: Naive wall-clock datetime from an API payload
            offset_seconds: Offset of the location from UTC

        Returns:
            Timezone-aware datetime
        """
        if dt.tzinfo is not None:
            return dt
        return dt.replace(tzinfo=cls.offset_timezone(offset_seconds))

    @staticmethod
    def format_datetime(dt: datetime | date | None, format_string: str) -> str:
        """Format a datetime with a strftime pattern, or a dash when missing."""
        if dt is None:
            return PLACEHOLDER
        return dt.strftime(format_string)
