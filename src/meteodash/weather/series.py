"""Timestamped forecast series and time windowing."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimestampedSeries:
    """Parallel ``times``/``values`` columns of an hourly or daily block.

    Times must be non-decreasing and both columns the same length. Values
    may be ``None`` where the API reported no sample.
    """

    times: tuple[datetime, ...]
    values: tuple[float | None, ...]

    def __post_init__(self) -> None:
        if len(self.times) != len(self.values):
            raise ValueError(
                f"times and values differ in length ({len(self.times)} != {len(self.values)})"
            )
        for earlier, later in zip(self.times, self.times[1:]):
            if later < earlier:
                raise ValueError(f"times must be non-decreasing ({later} after {earlier})")

    @classmethod
    def from_columns(
        cls, times: Sequence[datetime], values: Sequence[float | None]
    ) -> TimestampedSeries:
        """Build a series from possibly ragged API columns.

        The longer column is truncated to the length of the shorter one.
        """
        size = min(len(times), len(values))
        return cls(tuple(times[:size]), tuple(values[:size]))

    @classmethod
    def empty(cls) -> TimestampedSeries:
        return cls((), ())

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[tuple[datetime, float | None]]:
        return iter(zip(self.times, self.values))

    def __bool__(self) -> bool:
        return bool(self.times)


def future_window(series: TimestampedSeries, now: datetime, count: int) -> TimestampedSeries:
    """Select the next *count* samples at or after *now*.

    Order is preserved. Fewer than *count* remaining samples (possibly
    none) is not an error; callers treat an empty result as "nothing to
    show".

    Args:
        series: Source series, times non-decreasing
        now: Reference time, comparable with the series' times
        count: Maximum number of samples to return

    Returns:
        A new series holding at most *count* samples
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    start = bisect_left(series.times, now)
    stop = start + count
    return TimestampedSeries(series.times[start:stop], series.values[start:stop])
