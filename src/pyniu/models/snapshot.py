"""The flattened vehicle snapshot served by the local responder.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class VehicleIdentity(_SnapshotModel):
    serial_number: str = ""
    type: str = ""
    name: str = ""


class Position(_SnapshotModel):
    latitude: float | None = None
    longitude: float | None = None


class BatterySlot(_SnapshotModel):
    """One populated battery compartment."""

    compartment: Literal["A", "B"]
    bms_id: str = ""
    capacity: float | None = None
    """State of charge in percent."""
    grade: float | None = None
    """Health grade."""


class BatteryStatus(_SnapshotModel):
    estimated_mileage: float | None = None
    """Remaining range in km."""
    batteries: tuple[BatterySlot, ...] = Field(default=(), max_length=2)
    """Populated compartments, A before B."""


class TrackSummary(_SnapshotModel):
    """The most recent ride, converted to display units."""

    id: str = ""
    start_time: str = ""
    end_time: str = ""
    distance_km: float | None = None
    average_speed_kmh: float | None = None
    riding_time_minutes: float | None = None


class VehicleSnapshot(_SnapshotModel):
    """Aggregate produced by one successful pipeline run."""

    vehicle: VehicleIdentity = Field(default_factory=VehicleIdentity)
    position: Position = Field(default_factory=Position)
    battery: BatteryStatus = Field(default_factory=BatteryStatus)
    current_speed_kmh: float | None = None
    """Never populated by the pipeline; kept for consumers of the wire format."""
    total_mileage_km: float | None = None
    firmware_version: str = ""
    last_track: TrackSummary | None = None
    """``None`` when the vehicle has no recorded rides."""
