import json
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from meteodash.display.protocols import MockSink
from meteodash.settings.user import UserSettings
from meteodash.storage.kv import MemoryStore
from meteodash.weather.errors import NotFoundError, WeatherAPIError
from meteodash.weather.models import (
    AirQualityResponse,
    ForecastResponse,
    GeocodingResponse,
    GeocodingResult,
)

DATA_DIR = Path(__file__).parent / "data"
PARIS_TZ = timezone(timedelta(hours=2))


def load_json(name: str) -> dict[str, Any]:
    return json.loads((DATA_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def now() -> datetime:
    """10:30 local time on the sample day (Paris, UTC+2)."""
    return datetime(2025, 5, 3, 10, 30, tzinfo=PARIS_TZ)


@pytest.fixture
def forecast_raw() -> dict[str, Any]:
    return load_json("forecast_sample.json")


@pytest.fixture
def air_quality_raw() -> dict[str, Any]:
    return load_json("air_quality_sample.json")


@pytest.fixture
def geocoding_raw() -> dict[str, Any]:
    return load_json("geocoding_sample.json")


@pytest.fixture
def forecast_response(forecast_raw: dict[str, Any]) -> ForecastResponse:
    return ForecastResponse.model_validate(forecast_raw)


@pytest.fixture
def air_quality_response(air_quality_raw: dict[str, Any]) -> AirQualityResponse:
    return AirQualityResponse.model_validate(air_quality_raw)


@pytest.fixture
def paris(geocoding_raw: dict[str, Any]) -> GeocodingResult:
    return GeocodingResponse.model_validate(geocoding_raw).results[0]


@pytest.fixture
def settings(tmp_path: Path) -> UserSettings:
    return UserSettings(
        storage_path=tmp_path / "storage.json",
        preview_dir=tmp_path / "preview",
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def mock_sink() -> MockSink:
    return MockSink()


class FakeAPI:
    """In-memory stand-in for OpenMeteoAPI.

    ``before_forecast`` runs once inside the next ``fetch_forecast`` call,
    which lets a test start a second load while the first is in flight.
    """

    def __init__(
        self,
        forecast: ForecastResponse,
        air: AirQualityResponse | None = None,
        places: list[GeocodingResult] | None = None,
    ) -> None:
        self.forecast = forecast
        self.air = air
        self.places = {place.name: place for place in places or []}
        self.forecast_error: WeatherAPIError | None = None
        self.air_error: WeatherAPIError | None = None
        self.geocode_error: WeatherAPIError | None = None
        self.before_forecast: Callable[[], object] | None = None
        self.calls: list[tuple[Any, ...]] = []

    def geocode(self, name: str, count: int = 1) -> list[GeocodingResult]:
        self.calls.append(("geocode", name, count))
        if self.geocode_error is not None:
            raise self.geocode_error
        matches = [place for key, place in self.places.items() if key.startswith(name)]
        if not matches:
            raise NotFoundError(404, f"City not found: {name}")
        return matches

    def fetch_forecast(self, lat: float, lon: float) -> ForecastResponse:
        self.calls.append(("forecast", lat, lon))
        hook, self.before_forecast = self.before_forecast, None
        if hook is not None:
            hook()
        if self.forecast_error is not None:
            raise self.forecast_error
        return self.forecast

    def fetch_air_quality(self, lat: float, lon: float) -> AirQualityResponse:
        self.calls.append(("air", lat, lon))
        if self.air_error is not None:
            raise self.air_error
        if self.air is None:
            return AirQualityResponse()
        return self.air
