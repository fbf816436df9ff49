"""High-level async client for the NIU cloud API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyniu._api import battery as _battery_api
from pyniu._api import motor as _motor_api
from pyniu._api import tracks as _tracks_api
from pyniu._api import vehicles as _vehicles_api
from pyniu._crypto.hashing import sha256_hex
from pyniu._transport import HttpTransport, Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor
from pyniu.exceptions import NiuError
from pyniu.models.battery import BatteryHealth, BatteryInfo
from pyniu.models.motor import MotorInfo
from pyniu.models.snapshot import VehicleSnapshot
from pyniu.models.track import TrackDetail, TrackPage
from pyniu.models.vehicle import FirmwareVersion, OverallTally, Vehicle, VehiclePosition
from pyniu.pipeline import PipelineResult, SnapshotPipeline
from pyniu.session import Session, SessionManager
from pyniu.state.store import SnapshotStore

_logger = logging.getLogger(__name__)


class NiuClient:
    """Async client for the NIU cloud API.

    Every read returns either its response model or an
    :class:`~pyniu.errors.ErrorDescriptor`; vendor and network failures
    are never raised.

    Usage::

        async with NiuClient(config) as client:
            result = await client.refresh_snapshot()
            snapshot = client.get_snapshot()
    """

    def __init__(
        self,
        config: NiuConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None
        self._sessions = SessionManager(config)
        self._store = SnapshotStore()
        self._api_key_digest = sha256_hex(config.api_key) if config.api_key else ""

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> NiuClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._sessions.current

    @property
    def api_key_digest(self) -> str:
        """SHA-256 hex digest of the configured API key (empty if none)."""
        return self._api_key_digest

    async def login(
        self,
        account: str | None = None,
        password: str | None = None,
        country_code: str | None = None,
    ) -> Session | ErrorDescriptor:
        """Authenticate and store the session token.

        Credentials default to the configured ones.
        """
        transport = self._require_transport()
        return await self._sessions.authenticate(
            transport,
            self._config.account if account is None else account,
            self._config.password if password is None else password,
            self._config.country_code if country_code is None else country_code,
        )

    def set_session(self, token: str) -> Session | ErrorDescriptor:
        """Resume a session with a previously obtained token."""
        return self._sessions.set_session(token)

    def invalidate_session(self) -> None:
        self._sessions.invalidate()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise NiuError("Client not initialized. Use 'async with NiuClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_vehicles(self) -> list[Vehicle] | ErrorDescriptor:
        """Fetch all vehicles associated with the account."""
        transport = self._require_transport()
        return await _vehicles_api.fetch_vehicle_list(self._config, self.session, transport)

    async def get_vehicle_position(self, sn: str) -> VehiclePosition | ErrorDescriptor:
        transport = self._require_transport()
        return await _vehicles_api.fetch_vehicle_position(self._config, self.session, transport, sn)

    async def get_battery_info(self, sn: str) -> BatteryInfo | ErrorDescriptor:
        transport = self._require_transport()
        return await _battery_api.fetch_battery_info(self._config, self.session, transport, sn)

    async def get_battery_health(self, sn: str) -> BatteryHealth | ErrorDescriptor:
        transport = self._require_transport()
        return await _battery_api.fetch_battery_health(self._config, self.session, transport, sn)

    async def get_motor_info(self, sn: str) -> MotorInfo | ErrorDescriptor:
        transport = self._require_transport()
        return await _motor_api.fetch_motor_info(self._config, self.session, transport, sn)

    async def get_overall_tally(self, sn: str) -> OverallTally | ErrorDescriptor:
        transport = self._require_transport()
        return await _vehicles_api.fetch_overall_tally(self._config, self.session, transport, sn)

    async def get_firmware_version(self, sn: str) -> FirmwareVersion | ErrorDescriptor:
        transport = self._require_transport()
        return await _vehicles_api.fetch_firmware_version(self._config, self.session, transport, sn)

    async def get_tracks(
        self,
        sn: str,
        *,
        index: int = 0,
        page_size: int = 10,
    ) -> TrackPage | ErrorDescriptor:
        """Fetch one page of recorded rides, most recent first."""
        transport = self._require_transport()
        return await _tracks_api.fetch_tracks(
            self._config,
            self.session,
            transport,
            sn,
            index=index,
            page_size=page_size,
        )

    async def get_track_detail(
        self,
        sn: str,
        *,
        track_id: str,
        track_date: str,
    ) -> TrackDetail | ErrorDescriptor:
        """Fetch the GPS trace of one ride (``track_date`` as ``YYYYMMDD``)."""
        transport = self._require_transport()
        return await _tracks_api.fetch_track_detail(
            self._config,
            self.session,
            transport,
            sn,
            track_id=track_id,
            track_date=track_date,
        )

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    async def refresh_snapshot(self) -> PipelineResult:
        """Run the aggregation pipeline once with the configured credentials.

        On success the snapshot replaces the published one; on failure the
        published snapshot is left untouched.
        """
        self._require_transport()
        pipeline = SnapshotPipeline(
            self,
            account=self._config.account,
            password=self._config.password,
            country_code=self._config.country_code,
            store=self._store,
            time_zone=self._config.time_zone,
        )
        return await pipeline.run()

    def get_snapshot(self) -> VehicleSnapshot | None:
        """The last published snapshot, or ``None`` if no run succeeded yet."""
        return self._store.snapshot

    @property
    def store(self) -> SnapshotStore:
        return self._store
