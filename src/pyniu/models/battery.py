"""Battery models for single- and dual-compartment vehicles.

The NIU API reports batteries under ``batteries.compartmentA`` and, on
dual-battery vehicles, ``batteries.compartmentB``.  A compartment is only
considered present when the vendor sends an object for it; anything else
(missing key, ``null``, empty string) leaves the field ``None``.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from pyniu._normalize import safe_bool, safe_float, safe_str
from pyniu.models._base import NiuBaseModel


def _lift_compartments(values: Any) -> Any:
    """Move ``batteries.compartmentA/B`` objects up to ``compartmentA/B``."""
    if not isinstance(values, dict):
        return values
    merged = dict(values)
    batteries = values.get("batteries")
    if isinstance(batteries, dict):
        for key in ("compartmentA", "compartmentB"):
            merged.setdefault(key, batteries.get(key))
    for key in ("compartmentA", "compartmentB"):
        if not isinstance(merged.get(key), dict):
            merged.pop(key, None)
    merged.setdefault("raw", values)
    return merged


class BatteryInfoCompartment(NiuBaseModel):
    """Live state of one battery compartment."""

    bms_id: str = ""
    """Battery management system identifier."""
    charge: float | None = Field(default=None, validation_alias=AliasChoices("batteryCharging", "charge"))
    """State of charge in percent."""
    is_connected: bool | None = None
    temperature: float | None = None
    """Battery temperature in °C."""

    @field_validator("bms_id", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("charge", "temperature", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("is_connected", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool | None:
        return safe_bool(value)


class BatteryInfo(NiuBaseModel):
    """Response of ``/v3/motor_data/battery_info``."""

    compartment_a: BatteryInfoCompartment | None = None
    compartment_b: BatteryInfoCompartment | None = None
    estimated_mileage: float | None = None
    """Remaining range in km."""
    is_charging: bool | None = None
    centre_ctrl_battery: float | None = None
    """Charge of the internal controller battery in percent."""

    @model_validator(mode="before")
    @classmethod
    def _lift_batteries(cls, values: Any) -> Any:
        return _lift_compartments(values)

    @field_validator("estimated_mileage", "centre_ctrl_battery", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("is_charging", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool | None:
        return safe_bool(value)


class BatteryHealthCompartment(NiuBaseModel):
    """Health report of one battery compartment."""

    bms_id: str = ""
    grade: float | None = Field(default=None, validation_alias=AliasChoices("gradeBattery", "grade"))
    """Health grade (the vendor sends it as a numeric string)."""

    @field_validator("bms_id", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("grade", mode="before")
    @classmethod
    def _coerce_grade(cls, value: Any) -> float | None:
        return safe_float(value)


class BatteryHealth(NiuBaseModel):
    """Response of ``/v3/motor_data/battery_info/health``."""

    compartment_a: BatteryHealthCompartment | None = None
    compartment_b: BatteryHealthCompartment | None = None
    is_double_battery: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_batteries(cls, values: Any) -> Any:
        return _lift_compartments(values)

    @field_validator("is_double_battery", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool | None:
        return safe_bool(value)
