# filepath: src/meteodash/presenter.py
"""Core presenter for the weather dashboard."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Final

from meteodash.display.builder import DashboardBuilder
from meteodash.display.protocols import RenderSink
from meteodash.display.view_models import DashboardView
from meteodash.location import GeolocationError, LocationProvider
from meteodash.models.place import Place
from meteodash.settings import UserSettings
from meteodash.storage.kv import KeyValueStore
from meteodash.storage.places import PlaceList, PlaceStore
from meteodash.storage.preferences import Preferences
from meteodash.utils.time import TimeUtils
from meteodash.weather.api import OpenMeteoAPI
from meteodash.weather.errors import WeatherAPIError
from meteodash.weather.models import AirQualityResponse, ForecastResponse, GeocodingResult
from meteodash.weather.utils.units import TemperatureUnit

logger: Final = logging.getLogger(__name__)

EMPTY_CITY_MESSAGE: Final = "Please enter a city name."
CITY_LOAD_ERROR: Final = "Could not load weather. Try another city."
SAVED_LOAD_ERROR: Final = "Could not load weather for saved location."
GEO_LOAD_ERROR: Final = "Could not load weather for your location."
GEO_UNSUPPORTED: Final = "Geolocation not supported."
GEO_DENIED: Final = "Permission denied or unavailable."
YOUR_LOCATION: Final = "Your location"
MIN_SUGGEST_CHARS: Final = 2


@dataclass(frozen=True)
class _LoadedForecast:
    place: Place
    forecast: ForecastResponse
    air: AirQualityResponse | None


class ForecastPresenter:
    """Main presenter of the dashboard.

    This class orchestrates one load:
    - Geocoding a city name, or taking given coordinates
    - Fetching the forecast, then air quality on a best-effort basis
    - Building view models in the user's temperature unit
    - Remembering fresh searches in the recents list
    - Handing the result, or a single fallback message, to the sink

    Requests are numbered. When loads overlap, only the most recently
    started one may update the display or the recents list; a slower,
    older load is discarded when it completes.
    """

    def __init__(
        self,
        settings: UserSettings,
        storage: KeyValueStore,
        sink: RenderSink,
        api: OpenMeteoAPI | None = None,
        location_provider: LocationProvider | None = None,
        builder: DashboardBuilder | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the presenter.

        Args:
            settings: User settings
            storage: Key-value store for lists and preferences
            sink: Where dashboards and messages are rendered
            api: Optional custom API client
            location_provider: Source for "weather here" (None: unsupported)
            builder: Optional custom view-model builder
            clock: Returns the aware current time (default: local now)
        """
        self.settings = settings
        self.sink = sink
        self.api = api or OpenMeteoAPI(settings)
        self.location_provider = location_provider
        self.builder = builder or DashboardBuilder(settings)
        self.clock = clock or TimeUtils.now_localized

        self.preferences = Preferences(storage)
        places = PlaceStore(storage, on_change=sink.show_places)
        self.favorites = PlaceList.favorites(places, settings.favorites_capacity)
        self.recents = PlaceList.recents(places, settings.recents_capacity)

        self.last_place: Place | None = None
        self._last_loaded: _LoadedForecast | None = None
        self._generation = 0

    # ── public operations ────────────────────────────────────────────────────
    def search_city(self, city: str) -> DashboardView | None:
        """Geocode *city* and show its weather; remembered in recents.

        Returns:
            The rendered view, or None if the load failed or was superseded
        """
        city = city.strip()
        if not city:
            self.sink.show_message(EMPTY_CITY_MESSAGE)
            return None

        token = self._next_generation()
        self.sink.show_loading(city)
        try:
            match = self.api.geocode(city, count=1)[0]
            forecast = self.api.fetch_forecast(match.latitude, match.longitude)
        except WeatherAPIError as err:
            logger.error("Weather load for %r failed (%s): %s", city, err.code, err.message)
            return self._fail(token, CITY_LOAD_ERROR)
        return self._complete(token, match.to_place(), forecast, remember=True)

    def load_coordinates(
        self, lat: float, lon: float, name: str = "Location"
    ) -> DashboardView | None:
        """Show weather for known coordinates (a saved place); recents untouched."""
        token = self._next_generation()
        self.sink.show_loading(name)
        place = Place(name=name, lat=lat, lon=lon)
        try:
            forecast = self.api.fetch_forecast(lat, lon)
        except WeatherAPIError as err:
            logger.error("Weather load for %s failed (%s): %s", name, err.code, err.message)
            return self._fail(token, SAVED_LOAD_ERROR)
        return self._complete(token, place, forecast, remember=False)

    def load_place(self, place: Place) -> DashboardView | None:
        """Show a stored place, geocoding by name when it has no coordinates."""
        if place.lat is not None and place.lon is not None:
            return self.load_coordinates(place.lat, place.lon, place.name)
        return self.search_city(place.name)

    def load_current_location(self) -> DashboardView | None:
        """Show weather for the device location; remembered in recents."""
        if self.location_provider is None:
            self.sink.show_message(GEO_UNSUPPORTED)
            return None

        token = self._next_generation()
        self.sink.show_loading(YOUR_LOCATION)
        try:
            coords = self.location_provider.locate(timeout=self.settings.geolocation_timeout)
        except GeolocationError as err:
            logger.error("Geolocation failed: %s", err)
            return self._fail(token, GEO_DENIED)

        place = Place(name=YOUR_LOCATION, lat=coords.lat, lon=coords.lon)
        try:
            forecast = self.api.fetch_forecast(coords.lat, coords.lon)
        except WeatherAPIError as err:
            logger.error("Weather load for current location failed (%s): %s", err.code, err.message)
            return self._fail(token, GEO_LOAD_ERROR)
        return self._complete(token, place, forecast, remember=True)

    def suggest(self, query: str) -> list[GeocodingResult]:
        """Autocomplete matches for a partial city name.

        Queries shorter than two characters and lookup failures both give
        an empty list.
        """
        query = query.strip()
        if len(query) < MIN_SUGGEST_CHARS:
            return []
        count = self.settings.suggestion_count
        try:
            return self.api.geocode(query, count=count)[:count]
        except WeatherAPIError as err:
            logger.debug("No suggestions for %r: %s", query, err)
            return []

    def save_favorite(self) -> Place | None:
        """Add the last successfully loaded place to favorites."""
        if self.last_place is None:
            return None
        self.favorites.add(self.last_place)
        return self.last_place

    def set_unit(self, unit: TemperatureUnit) -> DashboardView | None:
        """Persist the unit and re-render the last dashboard in it.

        The cached responses are reused, so no request is made.
        """
        self.preferences.unit = unit
        loaded = self._last_loaded
        if loaded is None:
            return None
        view = self._build(loaded)
        self.sink.show_dashboard(view)
        return view

    # ── pipeline helpers ─────────────────────────────────────────────────────
    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_latest(self, token: int) -> bool:
        return token == self._generation

    def _fetch_air_quality(self, place: Place) -> AirQualityResponse | None:
        """Best effort: any failure leaves the air-quality panel hidden."""
        if place.lat is None or place.lon is None:
            return None
        try:
            return self.api.fetch_air_quality(place.lat, place.lon)
        except WeatherAPIError as exc:
            logger.info("Could not fetch air quality: %s", exc)
            return None

    def _build(self, loaded: _LoadedForecast) -> DashboardView:
        return self.builder.build(
            loaded.place.name,
            loaded.forecast,
            loaded.air,
            self.preferences.unit,
            self.clock(),
        )

    def _complete(
        self, token: int, place: Place, forecast: ForecastResponse, remember: bool
    ) -> DashboardView | None:
        air = self._fetch_air_quality(place)
        if not self._is_latest(token):
            logger.info("Discarding superseded weather load for %s", place.name)
            return None

        loaded = _LoadedForecast(place, forecast, air)
        view = self._build(loaded)
        if remember:
            self.recents.add(place)
        self.last_place = place
        self._last_loaded = loaded
        self.sink.show_dashboard(view)
        return view

    def _fail(self, token: int, message: str) -> None:
        if self._is_latest(token):
            self.sink.show_message(message)
        else:
            logger.info("Suppressing error of superseded load: %s", message)
        return None
