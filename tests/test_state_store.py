from __future__ import annotations

from pyniu.errors import ErrorKind, normalize_error
from pyniu.models.snapshot import VehicleIdentity, VehicleSnapshot
from pyniu.state.store import SnapshotStore


def _snapshot(sn: str) -> VehicleSnapshot:
    return VehicleSnapshot(vehicle=VehicleIdentity(serial_number=sn))


def test_store_starts_empty() -> None:
    store = SnapshotStore()
    assert store.snapshot is None
    assert store.published_at is None
    assert store.last_error is None


def test_failure_keeps_published_snapshot() -> None:
    store = SnapshotStore()
    store.publish(_snapshot("SN1"))
    error = normalize_error("boom", "get_tracks", ErrorKind.TRANSPORT)

    store.record_failure(error)

    assert store.snapshot is not None
    assert store.snapshot.vehicle.serial_number == "SN1"
    assert store.last_error == error


def test_publish_replaces_snapshot_and_clears_error() -> None:
    store = SnapshotStore()
    store.record_failure(normalize_error("boom", "get_vehicles"))
    store.publish(_snapshot("SN1"))
    store.publish(_snapshot("SN2"))

    assert store.snapshot is not None
    assert store.snapshot.vehicle.serial_number == "SN2"
    assert store.published_at is not None
    assert store.last_error is None
