"""Weather unit conversion utilities."""

from __future__ import annotations

from enum import Enum

from meteodash.utils.formatting import PLACEHOLDER, is_missing, round_half_away


class TemperatureUnit(str, Enum):
    """Temperature display preference.

    The value is the code persisted in the key-value store.
    """

    CELSIUS = "c"
    FAHRENHEIT = "f"

    @property
    def symbol(self) -> str:
        """Unit glyph appended to formatted temperatures."""
        return "°F" if self is TemperatureUnit.FAHRENHEIT else "°C"

    @classmethod
    def from_code(cls, code: str | None) -> TemperatureUnit:
        """Parse a persisted unit code, defaulting to Celsius."""
        try:
            return cls(code)
        except ValueError:
            return cls.CELSIUS


class UnitConverter:
    """Temperature conversion and display formatting.

    Forecast values are always fetched and kept in Celsius; the user's
    preference is applied only when a value is turned into text.
    """

    @staticmethod
    def to_fahrenheit(celsius: float) -> float:
        """Convert Celsius to Fahrenheit."""
        return celsius * 9 / 5 + 32

    @classmethod
    def convert(cls, celsius: float, unit: TemperatureUnit) -> float:
        """Convert a Celsius value into *unit* without rounding."""
        if unit is TemperatureUnit.FAHRENHEIT:
            return cls.to_fahrenheit(celsius)
        return celsius

    @classmethod
    def format_temperature(cls, value: float | None, unit: TemperatureUnit) -> str:
        """Format a Celsius temperature for display.

        Args:
            value: Temperature in Celsius, possibly missing
            unit: Display unit

        Returns:
            e.g. "21°C" / "70°F", or a dash for missing or NaN values
        """
        if value is None or is_missing(value):
            return PLACEHOLDER
        return f"{round_half_away(cls.convert(value, unit))}{unit.symbol}"
