"""Telemetry aggregation pipeline.

Drives the endpoint accessors in a fixed order and folds every response
into one :class:`~pyniu.models.snapshot.VehicleSnapshot`::

    AUTHENTICATE → LIST_VEHICLES → SELECT_VEHICLE → FETCH_POSITION
    → FETCH_BATTERY_INFO → FETCH_BATTERY_HEALTH → FETCH_MOTOR_INFO
    → FETCH_OVERALL_TALLY → FETCH_FIRMWARE_VERSION → FETCH_TRACKS → DONE

Each state runs only after the previous one succeeded.  The first failure
moves the pipeline to ``FAILED`` and nothing is published.  Calls are
strictly sequential; only one vendor request is ever in flight.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pyniu._constants import METERS_PER_KILOMETER, SECONDS_PER_MINUTE, TRACK_TIME_FORMAT
from pyniu.errors import ErrorDescriptor, ErrorKind, normalize_error
from pyniu.exceptions import NiuConfigError
from pyniu.models.battery import BatteryHealth, BatteryInfo
from pyniu.models.snapshot import (
    BatterySlot,
    BatteryStatus,
    Position,
    TrackSummary,
    VehicleIdentity,
    VehicleSnapshot,
)
from pyniu.models.track import Track
from pyniu.models.vehicle import Vehicle
from pyniu.state.store import SnapshotStore

if TYPE_CHECKING:
    from pyniu.client import NiuClient

_logger = logging.getLogger(__name__)

VEHICLE_INDEX = 0
TRACK_PAGE_INDEX = 0
TRACK_PAGE_SIZE = 1
NO_VEHICLES_FOUND = "No vehicles found"


class PipelineState(enum.StrEnum):
    AUTHENTICATE = "authenticate"
    LIST_VEHICLES = "list_vehicles"
    SELECT_VEHICLE = "select_vehicle"
    FETCH_POSITION = "fetch_position"
    FETCH_BATTERY_INFO = "fetch_battery_info"
    FETCH_BATTERY_HEALTH = "fetch_battery_health"
    FETCH_MOTOR_INFO = "fetch_motor_info"
    FETCH_OVERALL_TALLY = "fetch_overall_tally"
    FETCH_FIRMWARE_VERSION = "fetch_firmware_version"
    FETCH_TRACKS = "fetch_tracks"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Terminal outcome of one pipeline run."""

    state: PipelineState
    snapshot: VehicleSnapshot | None = None
    error: ErrorDescriptor | None = None
    failed_state: PipelineState | None = None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.DONE


@dataclass
class _SnapshotDraft:
    """Mutable accumulator filled field by field while the pipeline runs."""

    vehicles: list[Vehicle] = field(default_factory=list)
    vehicle: Vehicle | None = None
    position: Position = field(default_factory=Position)
    estimated_mileage: float | None = None
    battery_slots: dict[str, dict[str, Any]] = field(default_factory=dict)
    total_mileage_km: float | None = None
    firmware_version: str = ""
    last_track: TrackSummary | None = None

    @property
    def serial_number(self) -> str:
        return self.vehicle.serial_number if self.vehicle is not None else ""

    def build(self) -> VehicleSnapshot:
        vehicle = self.vehicle
        identity = (
            VehicleIdentity(serial_number=vehicle.serial_number, type=vehicle.vehicle_type, name=vehicle.name)
            if vehicle is not None
            else VehicleIdentity()
        )
        slots = tuple(
            BatterySlot(compartment=compartment, **values)
            for compartment, values in sorted(self.battery_slots.items())
        )
        return VehicleSnapshot(
            vehicle=identity,
            position=self.position,
            battery=BatteryStatus(estimated_mileage=self.estimated_mileage, batteries=slots),
            total_mileage_km=self.total_mileage_km,
            firmware_version=self.firmware_version,
            last_track=self.last_track,
        )


def _compartments(report: BatteryInfo | BatteryHealth) -> list[tuple[str, Any]]:
    pairs = [("A", report.compartment_a), ("B", report.compartment_b)]
    return [(name, compartment) for name, compartment in pairs if compartment is not None]


def render_timestamp(epoch_ms: int | None, tz: tzinfo) -> str:
    """Render a vendor epoch-millisecond value as a human-readable date-time.

    Raises
    ------
    ValueError
        If the value lies outside the range the platform can represent.
    """
    if epoch_ms is None:
        return ""
    try:
        moment = datetime.fromtimestamp(epoch_ms / 1000, tz=tz)
    except (ValueError, OverflowError, OSError) as exc:
        raise ValueError(f"Timestamp {epoch_ms} is out of range") from exc
    return moment.strftime(TRACK_TIME_FORMAT)


def summarize_track(track: Track, tz: tzinfo) -> TrackSummary:
    """Convert a vendor track to display units (km, minutes, date strings)."""
    return TrackSummary(
        id=track.track_id,
        start_time=render_timestamp(track.start_time, tz),
        end_time=render_timestamp(track.end_time, tz),
        distance_km=track.distance / METERS_PER_KILOMETER if track.distance is not None else None,
        average_speed_kmh=track.average_speed,
        riding_time_minutes=track.riding_time / SECONDS_PER_MINUTE if track.riding_time is not None else None,
    )


_Step = Callable[[_SnapshotDraft], Awaitable[ErrorDescriptor | None]]


class SnapshotPipeline:
    """One run of the aggregation state machine.

    Parameters
    ----------
    client : NiuClient
        Initialized client whose accessors are driven.
    account, password, country_code : str
        Credentials for the ``AUTHENTICATE`` state.
    store : SnapshotStore or None
        Receives the snapshot on ``DONE`` or the error on ``FAILED``.
    time_zone : str
        IANA zone used to render track timestamps.
    """

    def __init__(
        self,
        client: NiuClient,
        *,
        account: str,
        password: str,
        country_code: str,
        store: SnapshotStore | None = None,
        time_zone: str = "UTC",
    ) -> None:
        self._client = client
        self._account = account
        self._password = password
        self._country_code = country_code
        self._store = store
        try:
            self._tz: tzinfo = UTC if time_zone.upper() == "UTC" else ZoneInfo(time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise NiuConfigError(f"Unknown time zone {time_zone!r}") from exc
        self._state = PipelineState.AUTHENTICATE

    @property
    def state(self) -> PipelineState:
        return self._state

    def _steps(self) -> list[tuple[PipelineState, _Step]]:
        return [
            (PipelineState.AUTHENTICATE, self._authenticate),
            (PipelineState.LIST_VEHICLES, self._list_vehicles),
            (PipelineState.SELECT_VEHICLE, self._select_vehicle),
            (PipelineState.FETCH_POSITION, self._fetch_position),
            (PipelineState.FETCH_BATTERY_INFO, self._fetch_battery_info),
            (PipelineState.FETCH_BATTERY_HEALTH, self._fetch_battery_health),
            (PipelineState.FETCH_MOTOR_INFO, self._fetch_motor_info),
            (PipelineState.FETCH_OVERALL_TALLY, self._fetch_overall_tally),
            (PipelineState.FETCH_FIRMWARE_VERSION, self._fetch_firmware_version),
            (PipelineState.FETCH_TRACKS, self._fetch_tracks),
        ]

    async def run(self) -> PipelineResult:
        """Run every state in order, stopping at the first failure."""
        draft = _SnapshotDraft()
        for state, step in self._steps():
            self._state = state
            _logger.debug("Pipeline state %s", state.value)
            error = await step(draft)
            if error is not None:
                return self._fail(state, error)

        self._state = PipelineState.DONE
        snapshot = draft.build()
        if self._store is not None:
            self._store.publish(snapshot)
        _logger.info("Snapshot ready for sn=%s", snapshot.vehicle.serial_number)
        return PipelineResult(state=PipelineState.DONE, snapshot=snapshot)

    def _fail(self, state: PipelineState, error: ErrorDescriptor) -> PipelineResult:
        self._state = PipelineState.FAILED
        if self._store is not None:
            self._store.record_failure(error)
        _logger.warning("Pipeline failed in %s (%s error)", state.value, error.kind.value)
        return PipelineResult(state=PipelineState.FAILED, error=error, failed_state=state)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    async def _authenticate(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        result = await self._client.login(self._account, self._password, self._country_code)
        return result if isinstance(result, ErrorDescriptor) else None

    async def _list_vehicles(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        vehicles = await self._client.get_vehicles()
        if isinstance(vehicles, ErrorDescriptor):
            return vehicles
        if not vehicles:
            return normalize_error(NO_VEHICLES_FOUND, PipelineState.LIST_VEHICLES.value, ErrorKind.VENDOR)
        draft.vehicles = vehicles
        return None

    async def _select_vehicle(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        draft.vehicle = draft.vehicles[VEHICLE_INDEX]
        if not draft.vehicle.serial_number:
            return normalize_error("Vehicle has no serial number", PipelineState.SELECT_VEHICLE.value, ErrorKind.VENDOR)
        return None

    async def _fetch_position(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        position = await self._client.get_vehicle_position(draft.serial_number)
        if isinstance(position, ErrorDescriptor):
            return position
        draft.position = Position(latitude=position.latitude, longitude=position.longitude)
        return None

    async def _fetch_battery_info(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        info = await self._client.get_battery_info(draft.serial_number)
        if isinstance(info, ErrorDescriptor):
            return info
        for name, compartment in _compartments(info):
            slot = draft.battery_slots.setdefault(name, {})
            slot["bms_id"] = compartment.bms_id
            slot["capacity"] = compartment.charge
        draft.estimated_mileage = info.estimated_mileage
        return None

    async def _fetch_battery_health(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        health = await self._client.get_battery_health(draft.serial_number)
        if isinstance(health, ErrorDescriptor):
            return health
        for name, compartment in _compartments(health):
            draft.battery_slots.setdefault(name, {})["grade"] = compartment.grade
        return None

    async def _fetch_motor_info(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        # The snapshot carries no motor fields; the call still gates the run.
        motor = await self._client.get_motor_info(draft.serial_number)
        return motor if isinstance(motor, ErrorDescriptor) else None

    async def _fetch_overall_tally(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        tally = await self._client.get_overall_tally(draft.serial_number)
        if isinstance(tally, ErrorDescriptor):
            return tally
        draft.total_mileage_km = tally.total_mileage
        return None

    async def _fetch_firmware_version(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        firmware = await self._client.get_firmware_version(draft.serial_number)
        if isinstance(firmware, ErrorDescriptor):
            return firmware
        draft.firmware_version = firmware.version
        return None

    async def _fetch_tracks(self, draft: _SnapshotDraft) -> ErrorDescriptor | None:
        page = await self._client.get_tracks(draft.serial_number, index=TRACK_PAGE_INDEX, page_size=TRACK_PAGE_SIZE)
        if isinstance(page, ErrorDescriptor):
            return page
        if not page.items:
            _logger.info("No tracks available for sn=%s", draft.serial_number)
            draft.last_track = None
            return None
        try:
            draft.last_track = summarize_track(page.items[0], self._tz)
        except ValueError as exc:
            return normalize_error(
                {"message": str(exc), "trackId": page.items[0].track_id},
                PipelineState.FETCH_TRACKS.value,
                ErrorKind.VENDOR,
            )
        return None
