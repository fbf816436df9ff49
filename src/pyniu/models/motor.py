"""Motor/controller state model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyniu._normalize import safe_bool, safe_float, safe_int
from pyniu.models._base import NiuBaseModel


class MotorInfo(NiuBaseModel):
    """Response of ``/v3/motor_data/motor_info``.

    Numeric fields are ``None`` when the value is absent or unparseable.
    """

    is_charging: bool | None = None
    is_connected: bool | None = None
    is_acc_on: bool | None = None
    """Whether the ignition is on."""
    lock_status: int | None = None
    now_speed: float | None = None
    """Current speed in km/h."""
    centre_ctrl_battery: float | None = None
    estimated_mileage: float | None = None
    left_time: float | None = Field(default=None, validation_alias=AliasChoices("leftTime", "left_time"))
    """Remaining charging time in hours."""
    timestamp: int | None = Field(default=None, validation_alias=AliasChoices("time", "timestamp"))

    @field_validator("is_charging", "is_connected", "is_acc_on", mode="before")
    @classmethod
    def _coerce_bools(cls, value: Any) -> bool | None:
        return safe_bool(value)

    @field_validator("lock_status", "timestamp", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("now_speed", "centre_ctrl_battery", "estimated_mileage", "left_time", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)
