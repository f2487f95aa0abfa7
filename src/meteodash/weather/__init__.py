"""Weather package - holds the API client, response models and classifiers."""

from .air_quality import AirQuality, classify_aqi, current_sample_index
from .api import OpenMeteoAPI
from .errors import NetworkError, NotFoundError, ParseError, WeatherAPIError
from .models import (
    AirQualityResponse,
    CurrentConditions,
    DailyBlock,
    ForecastResponse,
    GeocodingResponse,
    GeocodingResult,
    HourlyBlock,
)
from .series import TimestampedSeries, future_window
from .utils import TemperatureUnit, UnitConverter, WeatherCodes

# Define what gets imported with: from meteodash.weather import *
__all__ = [
    "AirQuality",
    "AirQualityResponse",
    "CurrentConditions",
    "DailyBlock",
    "ForecastResponse",
    "GeocodingResponse",
    "GeocodingResult",
    "HourlyBlock",
    "NetworkError",
    "NotFoundError",
    "OpenMeteoAPI",
    "ParseError",
    "TemperatureUnit",
    "TimestampedSeries",
    "UnitConverter",
    "WeatherAPIError",
    "WeatherCodes",
    "classify_aqi",
    "current_sample_index",
    "future_window",
]
