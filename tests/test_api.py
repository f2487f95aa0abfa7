from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from meteodash.settings.user import UserSettings
from meteodash.weather.api import OpenMeteoAPI
from meteodash.weather.errors import (
    ClientError,
    NetworkError,
    NotFoundError,
    ParseError,
    ServerError,
    WeatherAPIError,
)
from meteodash.weather.models import AirQualityResponse, ForecastResponse


@pytest.fixture
def api(settings: UserSettings) -> OpenMeteoAPI:
    return OpenMeteoAPI(settings)


def _response(status: int, body: Any = None, text: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    resp.text = text
    return resp


def test_geocode_success(api: OpenMeteoAPI, geocoding_raw: dict[str, Any]) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, geocoding_raw)
        results = api.geocode("Paris", count=5)

    assert [r.display_name for r in results] == ["Paris, FR", "Paris, US"]
    url = mock_get.call_args.args[0]
    params = mock_get.call_args.kwargs["params"]
    assert url == "https://geocoding-api.open-meteo.com/v1/search"
    assert params == {"name": "Paris", "count": "5", "language": "en", "format": "json"}
    assert mock_get.call_args.kwargs["timeout"] is None


def test_geocode_no_results_is_not_found(api: OpenMeteoAPI) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, {"generationtime_ms": 0.2})
        with pytest.raises(NotFoundError, match="City not found: Atlantis"):
            api.geocode("Atlantis")


def test_fetch_forecast_params(api: OpenMeteoAPI, forecast_raw: dict[str, Any]) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, forecast_raw)
        result = api.fetch_forecast(48.85341, 2.3488)

    assert isinstance(result, ForecastResponse)
    assert result.current.weather_code == 2
    params = mock_get.call_args.kwargs["params"]
    assert mock_get.call_args.args[0] == "https://api.open-meteo.com/v1/forecast"
    assert params["latitude"] == "48.85341"
    assert params["longitude"] == "2.3488"
    assert params["timezone"] == "auto"
    assert params["current"] == (
        "temperature_2m,relative_humidity_2m,apparent_temperature,weather_code,wind_speed_10m"
    )
    assert params["hourly"] == "temperature_2m"
    assert params["daily"] == (
        "weather_code,temperature_2m_max,temperature_2m_min,sunrise,sunset,"
        "precipitation_probability_max"
    )


def test_fetch_air_quality_params(api: OpenMeteoAPI, air_quality_raw: dict[str, Any]) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, air_quality_raw)
        result = api.fetch_air_quality(48.85, 2.35)

    assert isinstance(result, AirQualityResponse)
    assert mock_get.call_args.args[0] == "https://air-quality-api.open-meteo.com/v1/air-quality"
    params = mock_get.call_args.kwargs["params"]
    assert params["hourly"] == "pm2_5,pm10,us_aqi"
    assert params["timezone"] == "auto"


def test_timeout_from_settings(tmp_path, forecast_raw: dict[str, Any]) -> None:
    api = OpenMeteoAPI(UserSettings(storage_path=tmp_path / "s.json", request_timeout=7.5))
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, forecast_raw)
        api.fetch_forecast(0.0, 0.0)
    assert mock_get.call_args.kwargs["timeout"] == 7.5


def test_network_error(api: OpenMeteoAPI) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.side_effect = requests.ConnectionError("Network down")
        with pytest.raises(NetworkError) as exc_info:
            api.fetch_forecast(1.0, 2.0)
    assert exc_info.value.code == 0
    assert isinstance(exc_info.value.original_error, requests.ConnectionError)


def test_http_error_uses_reason(api: OpenMeteoAPI) -> None:
    body = {"error": True, "reason": "Latitude must be in range of -90 to 90°."}
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(400, body)
        with pytest.raises(ClientError) as exc_info:
            api.fetch_forecast(123.0, 2.0)
    assert exc_info.value.code == 400
    assert "Latitude must be" in exc_info.value.message


def test_http_error_without_body(api: OpenMeteoAPI) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(503, ValueError("no json"), text="<html>")
        with pytest.raises(ServerError) as exc_info:
            api.fetch_air_quality(1.0, 2.0)
    assert exc_info.value.message == "Service unavailable (maintenance)"
    assert exc_info.value.is_server_error


def test_invalid_json_is_parse_error(api: OpenMeteoAPI) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, ValueError("Expecting value"), text="oops")
        with pytest.raises(ParseError):
            api.fetch_forecast(1.0, 2.0)


def test_non_object_json_is_parse_error(api: OpenMeteoAPI) -> None:
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, [1, 2, 3])
        with pytest.raises(ParseError, match="Expected a JSON object"):
            api.geocode("Paris")


def test_malformed_shape_is_parse_error(api: OpenMeteoAPI) -> None:
    body = {"hourly": {"time": ["not a time"], "temperature_2m": [1.0]}}
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, body)
        with pytest.raises(ParseError) as exc_info:
            api.fetch_forecast(1.0, 2.0)
    assert isinstance(exc_info.value, WeatherAPIError)
    assert exc_info.value.code == 0


def test_disordered_hourly_times_are_parse_error(
    api: OpenMeteoAPI, forecast_raw: dict[str, Any]
) -> None:
    times = forecast_raw["hourly"]["time"]
    times[0], times[1] = times[1], times[0]
    with patch("meteodash.weather.api.requests.get") as mock_get:
        mock_get.return_value = _response(200, forecast_raw)
        with pytest.raises(ParseError, match="Malformed ForecastResponse"):
            api.fetch_forecast(1.0, 2.0)
