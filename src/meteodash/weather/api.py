"""Weather API client for Open-Meteo."""

from __future__ import annotations

import logging
from typing import Any, Final, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from meteodash.settings import UserSettings

from .errors import NetworkError, NotFoundError, ParseError, WeatherAPIError
from .models import AirQualityResponse, ForecastResponse, GeocodingResponse, GeocodingResult

logger: Final = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Requested fields
CURRENT_FIELDS: Final = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
)
HOURLY_FIELDS: Final = ("temperature_2m",)
DAILY_FIELDS: Final = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "sunrise",
    "sunset",
    "precipitation_probability_max",
)
AIR_QUALITY_FIELDS: Final = ("pm2_5", "pm10", "us_aqi")

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check coordinates or parameters",
    404: "Endpoint not found",
    429: "Rate limit exceeded",
    500: "Open-Meteo internal error",
    502: "Bad gateway at Open-Meteo",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class OpenMeteoAPI:
    """Client for the Open-Meteo geocoding, forecast and air-quality APIs.

    Handles requests, network error handling and response validation,
    turning raw JSON into typed response models. Every failure surfaces as
    a :class:`WeatherAPIError` subclass; retries are left to the caller.
    """

    def __init__(self, config: UserSettings) -> None:
        """Initialize the API client.

        Args:
            config: Settings holding endpoint URLs and the request timeout
        """
        self.config = config
        self.timeout = config.request_timeout

    def geocode(self, name: str, count: int = 1) -> list[GeocodingResult]:
        """Search for places matching *name*.

        Args:
            name: Free-text city name
            count: Maximum number of matches to request

        Returns:
            Non-empty list of matches, best first

        Raises:
            NotFoundError: When the search has no results
            WeatherAPIError: For network, HTTP or parsing failures
        """
        params = {
            "name": name,
            "count": str(count),
            "language": "en",
            "format": "json",
        }
        raw = self._get_json(self.config.geocoding_url, params)
        response = self._validate(GeocodingResponse, raw)
        if not response.results:
            logger.info("No geocoding results for %r", name)
            raise NotFoundError(404, f"City not found: {name}")
        return response.results

    def fetch_forecast(self, lat: float, lon: float) -> ForecastResponse:
        """Retrieve current, hourly and daily weather for a location.

        Raises:
            WeatherAPIError: For network, HTTP or parsing failures
        """
        params = {
            "latitude": str(lat),
            "longitude": str(lon),
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
        }
        raw = self._get_json(self.config.forecast_url, params)
        return self._validate(ForecastResponse, raw)

    def fetch_air_quality(self, lat: float, lon: float) -> AirQualityResponse:
        """Retrieve hourly PM2.5, PM10 and US AQI for a location.

        Raises:
            WeatherAPIError: For network, HTTP or parsing failures
        """
        params = {
            "latitude": str(lat),
            "longitude": str(lon),
            "hourly": ",".join(AIR_QUALITY_FIELDS),
            "timezone": "auto",
        }
        raw = self._get_json(self.config.air_quality_url, params)
        return self._validate(AirQualityResponse, raw)

    # Private helper methods
    def _get_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        """Issue a GET request and decode the JSON object body."""
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Open-Meteo network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if resp.status_code != 200:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            if not (body.get("reason") or body.get("message")):
                body["reason"] = HTTP_ERROR_MAP.get(resp.status_code, resp.text)
            err = WeatherAPIError.from_response(body, resp.status_code)
            logger.error("Open-Meteo error: %s - %s", resp.status_code, err.message)
            raise err

        try:
            data = resp.json()
        except ValueError as exc:
            raise ParseError(f"Response is not JSON: {exc}", exc) from exc
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    @staticmethod
    def _validate(model: type[ModelT], raw: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Unexpected %s shape: %s", model.__name__, exc)
            raise ParseError(f"Malformed {model.__name__}", exc) from exc
