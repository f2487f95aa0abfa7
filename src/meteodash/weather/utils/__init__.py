"""Weather utility classes."""

from meteodash.weather.utils.codes import WeatherCode, WeatherCodes
from meteodash.weather.utils.units import TemperatureUnit, UnitConverter

__all__ = ["TemperatureUnit", "UnitConverter", "WeatherCode", "WeatherCodes"]
