"""Shared data models."""

from meteodash.models.base import NullableBlockModel, OffsetTimeModel
from meteodash.models.place import Place

__all__ = ["NullableBlockModel", "OffsetTimeModel", "Place"]
