"""The unit of favorites/recents storage."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Place(BaseModel):
    """A named location.

    Identity for de-duplication is the exact, case-sensitive ``name``.
    Places migrated from the legacy favorites format carry no coordinates.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., min_length=1)
    lat: float | None = None
    lon: float | None = None

    @property
    def has_coordinates(self) -> bool:
        """Whether the place can be loaded without geocoding."""
        return self.lat is not None and self.lon is not None
