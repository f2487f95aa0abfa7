"""Shared pydantic base classes for Open-Meteo payloads."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from meteodash.utils.time import TimeUtils


class OffsetTimeModel(BaseModel):
    """Base model for responses requested with ``timezone=auto``.

    Open-Meteo returns timestamps as naive local wall-clock strings and
    reports the location's offset separately in ``utc_offset_seconds``.
    Subclasses call :meth:`localize` before comparing times with "now".
    """

    model_config = ConfigDict(extra="ignore")

    utc_offset_seconds: int = 0
    timezone: str = "GMT"

    @property
    def location_tz(self) -> tzinfo:
        """Fixed-offset timezone of the forecast location."""
        return TimeUtils.offset_timezone(self.utc_offset_seconds)

    def localize(self, value: datetime) -> datetime:
        """Attach the location's UTC offset to a naive timestamp."""
        return TimeUtils.attach_offset(value, self.utc_offset_seconds)


class NullableBlockModel(BaseModel):
    """Base for column-oriented blocks (``hourly``, ``daily``).

    Columns the API omits or sends as ``null`` become empty lists instead
    of failing validation.
    """

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_null_columns(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @staticmethod
    def value_at(column: list[Any], index: int) -> Any:
        """Return ``column[index]`` or ``None`` when the column is short."""
        if 0 <= index < len(column):
            return column[index]
        return None
