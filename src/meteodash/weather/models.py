"""Typed models for Open-Meteo geocoding, forecast and air-quality responses.

Only the fields used by the dashboard are modelled. Missing blocks default
to empty so a partial response renders as "no data" instead of failing.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from meteodash.models import NullableBlockModel, OffsetTimeModel, Place
from meteodash.weather.series import TimestampedSeries

# ─────────────────────────── geocoding ───────────────────────────────────────


class GeocodingResult(BaseModel):
    """One match from the geocoding search endpoint."""

    model_config = ConfigDict(extra="ignore")

    name: str
    latitude: float
    longitude: float
    country_code: str = ""
    admin1: str | None = None

    @property
    def display_name(self) -> str:
        """Name used for the dashboard title and stored places ("Paris, FR")."""
        return f"{self.name}, {self.country_code}" if self.country_code else self.name

    @property
    def label(self) -> str:
        """Longer label for suggestion lists ("Paris, Île-de-France")."""
        return f"{self.name}, {self.admin1}" if self.admin1 else self.name

    def to_place(self) -> Place:
        return Place(name=self.display_name, lat=self.latitude, lon=self.longitude)


class GeocodingResponse(BaseModel):
    """Search response; an absent ``results`` key means no match."""

    model_config = ConfigDict(extra="ignore")

    results: list[GeocodingResult] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


# ─────────────────────────── forecast blocks ─────────────────────────────────


class CurrentConditions(BaseModel):
    """``current`` block of the forecast response."""

    model_config = ConfigDict(extra="ignore")

    time: datetime | None = None
    temperature_2m: float | None = None
    relative_humidity_2m: float | None = None
    apparent_temperature: float | None = None
    weather_code: int | None = None
    wind_speed_10m: float | None = None


class HourlyBlock(NullableBlockModel):
    """``hourly`` block of the forecast response."""

    time: list[datetime] = Field(default_factory=list)
    temperature_2m: list[float | None] = Field(default_factory=list)

    @field_validator("time")
    @classmethod
    def _check_time_order(cls, v: list[datetime]) -> list[datetime]:
        for earlier, later in zip(v, v[1:]):
            if later < earlier:
                raise ValueError(f"hourly times must be non-decreasing ({later} after {earlier})")
        return v


class DailyBlock(NullableBlockModel):
    """``daily`` block of the forecast response."""

    time: list[date] = Field(default_factory=list)
    weather_code: list[int | None] = Field(default_factory=list)
    temperature_2m_max: list[float | None] = Field(default_factory=list)
    temperature_2m_min: list[float | None] = Field(default_factory=list)
    sunrise: list[datetime | None] = Field(default_factory=list)
    sunset: list[datetime | None] = Field(default_factory=list)
    precipitation_probability_max: list[float | None] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.time)


class AirQualityHourly(NullableBlockModel):
    """``hourly`` block of the air-quality response."""

    time: list[datetime] = Field(default_factory=list)
    pm2_5: list[float | None] = Field(default_factory=list)
    pm10: list[float | None] = Field(default_factory=list)
    us_aqi: list[float | None] = Field(default_factory=list)


# ─────────────────────────── top-level responses ─────────────────────────────


class _BlockDefaults(OffsetTimeModel):
    @model_validator(mode="before")
    @classmethod
    def _drop_null_blocks(cls, data: Any) -> Any:
        """Treat ``"hourly": null`` like an absent block."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ForecastResponse(_BlockDefaults):
    """Forecast response with current, hourly and daily blocks.

    Timestamps are naive local times; use :meth:`hourly_series` and
    :meth:`localize` to get aware values.
    """

    latitude: float | None = None
    longitude: float | None = None
    current: CurrentConditions = Field(default_factory=CurrentConditions)
    hourly: HourlyBlock = Field(default_factory=HourlyBlock)
    daily: DailyBlock = Field(default_factory=DailyBlock)

    def hourly_series(self) -> TimestampedSeries:
        """Hourly temperatures as an aware, time-ordered series."""
        times = [self.localize(t) for t in self.hourly.time]
        return TimestampedSeries.from_columns(times, self.hourly.temperature_2m)


class AirQualityResponse(_BlockDefaults):
    """Air-quality response with an hourly PM2.5 / PM10 / US AQI block."""

    latitude: float | None = None
    longitude: float | None = None
    hourly: AirQualityHourly = Field(default_factory=AirQualityHourly)
