"""Render-ready view models handed to a render sink.

All values are preformatted strings in the user's chosen unit; sinks only
lay them out.
"""

from __future__ import annotations

from dataclasses import dataclass

from meteodash.weather.utils.units import TemperatureUnit


@dataclass(frozen=True)
class HourlyPreviewItem:
    label: str
    temperature: str


@dataclass(frozen=True)
class CurrentView:
    """Current conditions card."""

    place_name: str
    description: str
    icon: str
    temperature: str
    feels_like: str
    humidity: str
    wind: str
    preview: tuple[HourlyPreviewItem, ...] = ()

    @property
    def summary(self) -> str:
        return f"{self.description}. {self.temperature} (feels {self.feels_like})"

    @property
    def meta(self) -> str:
        return f"Humidity {self.humidity} • Wind {self.wind}"


@dataclass(frozen=True)
class DailyView:
    """One day card of the multi-day forecast."""

    weekday: str
    icon: str
    description: str
    high: str
    low: str
    sunrise: str
    sunset: str
    precipitation: str


@dataclass(frozen=True)
class ChartPoint:
    x: float
    y: float
    label: str
    value_label: str


@dataclass(frozen=True)
class ChartView:
    """Hourly temperature chart in canvas coordinates."""

    width: int
    height: int
    left: float
    right: float
    gridlines: tuple[float, ...]
    points: tuple[ChartPoint, ...]


@dataclass(frozen=True)
class AirQualityView:
    summary: str
    label: str
    color: str
    pm2_5: str
    pm10: str


@dataclass(frozen=True)
class DashboardView:
    """Everything one successful load renders."""

    current: CurrentView
    unit: TemperatureUnit
    daily: tuple[DailyView, ...] = ()
    chart: ChartView | None = None
    air_quality: AirQualityView | None = None
