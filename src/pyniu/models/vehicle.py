"""Vehicle models: list entry, position, overall tally and firmware."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyniu._normalize import safe_bool, safe_float, safe_int, safe_str
from pyniu.models._base import NiuBaseModel


class Vehicle(NiuBaseModel):
    """A vehicle associated with the user's account.

    Mapped from the ``/motoinfo/list`` response.
    """

    serial_number: str = Field(default="", validation_alias=AliasChoices("sn", "sn_id", "serialNumber"))
    """Vehicle serial number, the key of every other endpoint."""
    vehicle_type: str = Field(default="", validation_alias=AliasChoices("type", "product_type", "vehicleType"))
    """Product type (e.g. ``"NGT"``)."""
    name: str = Field(default="", validation_alias=AliasChoices("name", "scooter_name"))
    """User-defined vehicle name."""

    @field_validator("serial_number", "vehicle_type", "name", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""


class VehiclePosition(NiuBaseModel):
    """Last known position, from ``/motoinfo/currentpos``."""

    latitude: float | None = Field(default=None, validation_alias=AliasChoices("lat", "latitude"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("lng", "lon", "longitude"))
    timestamp: int | None = Field(default=None, validation_alias=AliasChoices("timestamp", "time"))
    """Position timestamp (epoch ms)."""

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> int | None:
        return safe_int(value)


class OverallTally(NiuBaseModel):
    """Lifetime counters, from ``/motoinfo/overallTally``."""

    total_mileage: float | None = None
    """Odometer reading in km."""
    bind_days_count: int | None = None
    """Days since the vehicle was bound to the account."""

    @field_validator("total_mileage", mode="before")
    @classmethod
    def _coerce_float(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("bind_days_count", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int | None:
        return safe_int(value)


class FirmwareVersion(NiuBaseModel):
    """Firmware state, from ``/motorota/getfirmwareversion``."""

    version: str = ""
    hard_version: str = ""
    ble_version: str = Field(default="", validation_alias=AliasChoices("bleVersion", "ble_version"))
    update_available: bool = Field(default=False, validation_alias=AliasChoices("isSupportUpdate", "update_available"))

    @field_validator("version", "hard_version", "ble_version", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("update_available", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        return bool(safe_bool(value))
