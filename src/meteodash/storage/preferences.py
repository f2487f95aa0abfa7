"""Persisted user preferences (temperature unit and colour theme)."""

from __future__ import annotations

from enum import Enum
from typing import Final

from meteodash.storage.kv import KeyValueStore
from meteodash.weather.utils.units import TemperatureUnit

UNIT_KEY: Final = "unit"
THEME_KEY: Final = "themePref"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Preferences:
    """Single accessor for preference keys in the key-value store.

    The unit is read here and handed explicitly to formatting code; nothing
    else reads the store for it.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @property
    def unit(self) -> TemperatureUnit:
        """Temperature display unit, Celsius unless set otherwise."""
        return TemperatureUnit.from_code(self.store.get_item(UNIT_KEY))

    @unit.setter
    def unit(self, unit: TemperatureUnit) -> None:
        self.store.set_item(UNIT_KEY, unit.value)

    @property
    def theme(self) -> Theme:
        """Colour theme, light unless dark was chosen."""
        return Theme.DARK if self.store.get_item(THEME_KEY) == Theme.DARK.value else Theme.LIGHT

    def toggle_theme(self) -> Theme:
        """Switch between light and dark and persist the choice."""
        theme = Theme.LIGHT if self.theme is Theme.DARK else Theme.DARK
        self.store.set_item(THEME_KEY, theme.value)
        return theme
