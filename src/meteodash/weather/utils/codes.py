"""WMO weather code descriptions and icon glyphs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Final

SUN: Final = "☀️"
SUN_CLOUD: Final = "🌤️"
CLOUD: Final = "☁️"
FOG: Final = "🌫️"
RAIN: Final = "🌧️"
SNOW: Final = "❄️"
STORM: Final = "⛈️"
THERMOMETER: Final = "🌡️"


@dataclass(frozen=True)
class WeatherCode:
    """One row of the WMO lookup table."""

    code: int
    description: str
    icon: str


_KNOWN_CODES: Final[tuple[WeatherCode, ...]] = (
    WeatherCode(0, "Clear sky", SUN),
    WeatherCode(1, "Mainly clear", SUN_CLOUD),
    WeatherCode(2, "Partly cloudy", SUN_CLOUD),
    WeatherCode(3, "Overcast", CLOUD),
    WeatherCode(45, "Fog", FOG),
    WeatherCode(48, "Depositing rime fog", FOG),
    WeatherCode(51, "Light drizzle", RAIN),
    WeatherCode(53, "Drizzle", RAIN),
    WeatherCode(55, "Dense drizzle", RAIN),
    WeatherCode(61, "Slight rain", RAIN),
    WeatherCode(63, "Rain", RAIN),
    WeatherCode(65, "Heavy rain", RAIN),
    WeatherCode(71, "Slight snow", SNOW),
    WeatherCode(73, "Snow", SNOW),
    WeatherCode(75, "Heavy snow", SNOW),
    WeatherCode(80, "Rain showers", RAIN),
    WeatherCode(81, "Heavy showers", RAIN),
    WeatherCode(82, "Violent showers", RAIN),
    WeatherCode(95, "Thunderstorm", STORM),
)


class WeatherCodes:
    """Lookup of WMO weather codes as reported by Open-Meteo.

    Both lookups are total: any code missing from the table, including
    ``None`` when the API omits the field, maps to a generic fallback.
    """

    FALLBACK: ClassVar[WeatherCode] = WeatherCode(-1, "Weather", THERMOMETER)

    _table: ClassVar[Mapping[int, WeatherCode]] = MappingProxyType(
        {entry.code: entry for entry in _KNOWN_CODES}
    )

    @classmethod
    def lookup(cls, code: int | None) -> WeatherCode:
        """Return the table row for *code*, or the fallback row."""
        if code is None:
            return cls.FALLBACK
        return cls._table.get(code, cls.FALLBACK)

    @classmethod
    def describe(cls, code: int | None) -> str:
        """Human-readable description, e.g. "Clear sky"."""
        return cls.lookup(code).description

    @classmethod
    def icon_for(cls, code: int | None) -> str:
        """Emoji glyph for the condition."""
        return cls.lookup(code).icon

    @classmethod
    def known_codes(cls) -> frozenset[int]:
        """All codes that have a dedicated table entry."""
        return frozenset(cls._table)
