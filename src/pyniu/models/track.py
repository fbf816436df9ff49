"""Ride track models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyniu._normalize import safe_float, safe_int, safe_str
from pyniu.models._base import NiuBaseModel


class Track(NiuBaseModel):
    """One recorded ride, as listed by ``/v5/track/list/v2``."""

    track_id: str = Field(default="", validation_alias=AliasChoices("trackId", "track_id", "id"))
    start_time: int | None = None
    """Ride start (epoch ms)."""
    end_time: int | None = None
    """Ride end (epoch ms)."""
    distance: float | None = None
    """Distance in meters."""
    average_speed: float | None = Field(default=None, validation_alias=AliasChoices("avespeed", "average_speed"))
    """Average speed in km/h."""
    riding_time: float | None = Field(default=None, validation_alias=AliasChoices("ridingtime", "riding_time"))
    """Riding time in seconds."""
    date: str = ""
    """Ride date as ``YYYYMMDD``, the key for :class:`TrackDetail` lookups."""

    @field_validator("track_id", "date", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("distance", "average_speed", "riding_time", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class TrackPage(NiuBaseModel):
    """A page of the track list."""

    items: list[Track] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]


class TrackPoint(NiuBaseModel):
    """A single GPS fix along a track."""

    latitude: float | None = Field(default=None, validation_alias=AliasChoices("lat", "latitude"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("lng", "lon", "longitude"))
    date: int | None = None
    """Fix time (epoch ms)."""

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> int | None:
        return safe_int(value)


class TrackDetail(NiuBaseModel):
    """Response of ``/v5/track/detail``."""

    start_point: TrackPoint | None = None
    last_point: TrackPoint | None = None
    track_items: list[TrackPoint] = Field(default_factory=list)
    start_time: int | None = None
    last_date: int | None = None

    @field_validator("start_point", "last_point", mode="before")
    @classmethod
    def _coerce_point(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @field_validator("track_items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @field_validator("start_time", "last_date", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)
