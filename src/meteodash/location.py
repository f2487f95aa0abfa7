"""Device location lookup used by "weather here"."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class GeolocationError(Exception):
    """Raised when no location fix can be obtained."""


class PermissionDeniedError(GeolocationError):
    """The user or platform refused access to the location."""


class GeolocationTimeoutError(GeolocationError):
    """No fix arrived within the allowed time."""


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@runtime_checkable
class LocationProvider(Protocol):
    """Source of the device's position."""

    def locate(self, timeout: float) -> Coordinates:
        """Return the current position.

        Args:
            timeout: Seconds to wait for a fix

        Raises:
            PermissionDeniedError: When access is refused or unavailable
            GeolocationTimeoutError: When no fix arrives in time
        """
        ...


class ConfiguredLocation:
    """Location taken from the ``home_lat``/``home_lon`` settings.

    Behaves like a refused permission prompt when no home is configured.
    """

    def __init__(self, lat: float | None, lon: float | None) -> None:
        self.lat = lat
        self.lon = lon

    def locate(self, timeout: float) -> Coordinates:
        if self.lat is None or self.lon is None:
            raise PermissionDeniedError("No home location configured (set home_lat/home_lon)")
        return Coordinates(self.lat, self.lon)
