from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest
from pydantic import ValidationError

from meteodash.models.place import Place
from meteodash.weather.models import (
    AirQualityResponse,
    ForecastResponse,
    GeocodingResponse,
    GeocodingResult,
)


def test_forecast_sample_parses(forecast_response: ForecastResponse) -> None:
    assert forecast_response.utc_offset_seconds == 7200
    assert forecast_response.timezone == "Europe/Paris"
    assert forecast_response.current.weather_code == 2
    assert forecast_response.current.temperature_2m == pytest.approx(17.4)
    assert len(forecast_response.hourly.time) == 24
    assert len(forecast_response.daily) == 7
    assert forecast_response.daily.time[0] == date(2025, 5, 3)
    assert forecast_response.daily.sunrise[0] == datetime(2025, 5, 3, 6, 25)


def test_localize_attaches_offset(forecast_response: ForecastResponse) -> None:
    naive = datetime(2025, 5, 3, 12, 0)
    aware = forecast_response.localize(naive)
    assert aware.utcoffset() == timedelta(hours=2)
    assert aware == datetime(2025, 5, 3, 10, 0, tzinfo=timezone.utc)
    assert forecast_response.location_tz.utcoffset(None) == timedelta(hours=2)


def test_forecast_missing_blocks_default_empty() -> None:
    response = ForecastResponse.model_validate({"latitude": 1.0, "hourly": None, "daily": None})
    assert response.current.temperature_2m is None
    assert response.hourly.time == []
    assert len(response.daily) == 0
    assert len(response.hourly_series()) == 0


def test_forecast_null_columns_and_samples() -> None:
    raw: dict[str, Any] = {
        "hourly": {"time": ["2025-05-03T10:00", "2025-05-03T11:00"], "temperature_2m": [None, 12.5]},
        "daily": {"time": ["2025-05-03"], "weather_code": None, "sunrise": [None]},
    }
    response = ForecastResponse.model_validate(raw)
    assert response.hourly_series().values == (None, 12.5)
    assert response.daily.weather_code == []
    assert response.daily.value_at(response.daily.weather_code, 0) is None
    assert response.daily.value_at(response.daily.sunrise, 0) is None


def test_ragged_hourly_columns_truncate() -> None:
    raw = {
        "hourly": {
            "time": ["2025-05-03T10:00", "2025-05-03T11:00", "2025-05-03T12:00"],
            "temperature_2m": [10.0, 11.0],
        }
    }
    series = ForecastResponse.model_validate(raw).hourly_series()
    assert len(series) == 2


def test_disordered_hourly_times_rejected(forecast_raw: dict[str, Any]) -> None:
    times = forecast_raw["hourly"]["time"]
    times[0], times[1] = times[1], times[0]
    with pytest.raises(ValidationError, match="non-decreasing"):
        ForecastResponse.model_validate(forecast_raw)


def test_air_quality_sample_parses(air_quality_response: AirQualityResponse) -> None:
    assert len(air_quality_response.hourly.time) == 12
    assert air_quality_response.hourly.us_aqi[5] == 51


def test_geocoding_results(geocoding_raw: dict[str, Any]) -> None:
    response = GeocodingResponse.model_validate(geocoding_raw)
    first = response.results[0]
    assert first.display_name == "Paris, FR"
    assert first.label == "Paris, Île-de-France"
    assert first.to_place() == Place(name="Paris, FR", lat=48.85341, lon=2.3488)


def test_geocoding_without_results() -> None:
    assert GeocodingResponse.model_validate({"generationtime_ms": 0.3}).results == []
    assert GeocodingResponse.model_validate({"results": None}).results == []


def test_geocoding_result_without_country() -> None:
    result = GeocodingResult(name="Atlantis", latitude=0.0, longitude=0.0)
    assert result.display_name == "Atlantis"
    assert result.label == "Atlantis"


def test_place_validation() -> None:
    place = Place(name="Oslo")
    assert not place.has_coordinates
    assert Place(name="Oslo", lat=59.9, lon=10.7).has_coordinates
    with pytest.raises(ValidationError):
        Place(name="")
    with pytest.raises(ValidationError):
        place.name = "Bergen"  # type: ignore[misc]
