"""In-memory holder of the last published snapshot.

The aggregation pipeline is the only writer.  A snapshot is published
whole or not at all; a failed run records its error but leaves the
previously published snapshot in place.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from pyniu.errors import ErrorDescriptor
from pyniu.models.snapshot import VehicleSnapshot

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SnapshotStore:
    """Single-writer store for the vehicle snapshot."""

    def __init__(self) -> None:
        self._snapshot: VehicleSnapshot | None = None
        self._published_at: datetime | None = None
        self._last_error: ErrorDescriptor | None = None

    @property
    def snapshot(self) -> VehicleSnapshot | None:
        """The last published snapshot, or ``None`` before the first success."""
        return self._snapshot

    @property
    def published_at(self) -> datetime | None:
        return self._published_at

    @property
    def last_error(self) -> ErrorDescriptor | None:
        """Error of the most recent failed run, cleared by the next publish."""
        return self._last_error

    def publish(self, snapshot: VehicleSnapshot) -> None:
        """Replace the served snapshot."""
        self._snapshot = snapshot
        self._published_at = _utcnow()
        self._last_error = None
        _logger.debug("Snapshot published for sn=%s", snapshot.vehicle.serial_number)

    def record_failure(self, error: ErrorDescriptor) -> None:
        """Remember a failed run without touching the published snapshot."""
        self._last_error = error
