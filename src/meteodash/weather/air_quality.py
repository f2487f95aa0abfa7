"""US AQI classification and the current air-quality snapshot."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel

if TYPE_CHECKING:
    from meteodash.weather.models import AirQualityResponse

UNKNOWN_LABEL: Final = "Unknown"
HAZARDOUS_LABEL: Final = "Hazardous"

# Upper bound (inclusive) -> label, ascending
AQI_BREAKPOINTS: Final[tuple[tuple[float, str], ...]] = (
    (50, "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
    (300, "Very Unhealthy"),
)


def classify_aqi(aqi: float | None) -> str:
    """Map a US AQI value to its severity label.

    Args:
        aqi: US AQI value; ``None`` or NaN when unavailable

    Returns:
        Label such as "Good" or "Hazardous", or "Unknown"
    """
    if aqi is None or math.isnan(aqi):
        return UNKNOWN_LABEL
    for upper, label in AQI_BREAKPOINTS:
        if aqi <= upper:
            return label
    return HAZARDOUS_LABEL


def current_sample_index(times: Sequence[datetime], now: datetime) -> int | None:
    """Index of the first sample at or after *now*.

    Falls back to the last sample when every sample is in the past, so a
    stale reading is shown rather than nothing. ``None`` for no samples.
    """
    for index, sample_time in enumerate(times):
        if sample_time >= now:
            return index
    return len(times) - 1 if times else None


class AirQuality(BaseModel):
    """Air quality reading selected for display.

    Holds the US AQI and particulate concentrations (µg/m³) of a single
    hourly sample.
    """

    # EPA colour for each label
    AQI_COLORS: ClassVar[dict[str, str]] = {
        "Good": "#00E400",
        "Moderate": "#FFFF00",
        "Unhealthy for Sensitive Groups": "#FF7E00",
        "Unhealthy": "#FF0000",
        "Very Unhealthy": "#8F3F97",
        HAZARDOUS_LABEL: "#7E0023",
    }

    time: datetime | None = None
    us_aqi: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None

    @property
    def label(self) -> str:
        """Severity label for the US AQI value."""
        return classify_aqi(self.us_aqi)

    @property
    def color(self) -> str:
        """Get the colour code associated with this AQI level.

        Returns:
            Hex colour code, grey when the level is unknown
        """
        return self.AQI_COLORS.get(self.label, "#9E9E9E")

    @classmethod
    def from_response(cls, response: AirQualityResponse, now: datetime) -> AirQuality | None:
        """Pick the current-or-next hourly sample out of a response.

        Args:
            response: Validated air-quality response
            now: Aware reference time

        Returns:
            Snapshot, or ``None`` when the response holds no samples
        """
        hourly = response.hourly
        times = [response.localize(t) for t in hourly.time]
        index = current_sample_index(times, now)
        if index is None:
            return None
        return cls(
            time=times[index],
            us_aqi=hourly.value_at(hourly.us_aqi, index),
            pm2_5=hourly.value_at(hourly.pm2_5, index),
            pm10=hourly.value_at(hourly.pm10, index),
        )
