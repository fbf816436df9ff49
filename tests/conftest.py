from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from pyniu._transport import RawResponse, TransportUnavailableError
from pyniu.config import NiuConfig

SERIAL = "SN-E2E-123"
TOKEN = "token-e2e-1"

# 2022-03-19 12:00:00 UTC and one hour later
TRACK_START_MS = 1647691200000
TRACK_END_MS = 1647694800000


def ok(data: Any) -> dict[str, Any]:
    return {"status": 0, "desc": "成功", "data": data}


def default_bodies() -> dict[str, Any]:
    return {
        "/appv2/login": ok({"token": TOKEN}),
        "/motoinfo/list": ok([{"sn": SERIAL, "type": "NQi GTS", "name": "Blue Scooter"}]),
        "/motoinfo/currentpos": ok({"lat": 52.52, "lng": 13.405, "timestamp": 1647690000000}),
        "/v3/motor_data/battery_info": ok(
            {
                "batteries": {
                    "compartmentA": {"bmsId": "BMS-A", "batteryCharging": 87, "isConnected": True},
                    "compartmentB": {"bmsId": "BMS-B", "batteryCharging": 55, "isConnected": True},
                },
                "estimatedMileage": 42,
                "isCharging": 0,
                "centreCtrlBattery": 100,
            }
        ),
        "/v3/motor_data/battery_info/health": ok(
            {
                "batteries": {
                    "compartmentA": {"bmsId": "BMS-A", "gradeBattery": "95.5"},
                    "compartmentB": {"bmsId": "BMS-B", "gradeBattery": "88.0"},
                },
                "isDoubleBattery": True,
            }
        ),
        "/v3/motor_data/motor_info": ok({"isCharging": 0, "lockStatus": 1, "isAccOn": 0, "nowSpeed": 0}),
        "/motoinfo/overallTally": ok({"totalMileage": "1234.5", "bindDaysCount": 100}),
        "/motorota/getfirmwareversion": ok({"version": "N1GT3T30", "hardVersion": "N1GT1H07", "isSupportUpdate": 0}),
        "/v5/track/list/v2": ok(
            {
                "items": [
                    {
                        "trackId": "TRACK-1",
                        "startTime": TRACK_START_MS,
                        "endTime": TRACK_END_MS,
                        "distance": 1500,
                        "avespeed": 18.5,
                        "ridingtime": 120,
                        "date": "20220319",
                    }
                ]
            }
        ),
        "/v5/track/detail": ok(
            {
                "startPoint": {"lat": 52.5, "lng": 13.4},
                "lastPoint": {"lat": 52.51, "lng": 13.41},
                "trackItems": [
                    {"lat": 52.5, "lng": 13.4, "date": TRACK_START_MS},
                    {"lat": 52.51, "lng": 13.41, "date": TRACK_END_MS},
                ],
            }
        ),
    }


@dataclass
class RecordedCall:
    method: str
    path: str
    query: dict[str, list[str]]
    headers: dict[str, str]
    json_body: dict[str, Any] | None
    form: dict[str, str] | None


@dataclass
class FakeNiuBackend:
    """Canned NIU API keyed by request path."""

    bodies: dict[str, Any] = field(default_factory=default_bodies)
    statuses: dict[str, Any] = field(default_factory=dict)
    unreachable: set[str] = field(default_factory=set)
    calls: list[RecordedCall] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [call.path for call in self.calls]

    def set_data(self, path: str, data: Any) -> None:
        self.bodies[path] = ok(data)

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Any,
        json_body: Any = None,
        form: Any = None,
    ) -> RawResponse:
        parts = urlsplit(url)
        self.calls.append(
            RecordedCall(
                method=method,
                path=parts.path,
                query=parse_qs(parts.query),
                headers=dict(headers),
                json_body=dict(json_body) if json_body is not None else None,
                form=dict(form) if form is not None else None,
            )
        )
        if parts.path in self.unreachable:
            raise TransportUnavailableError(f"Request to {url} failed: connection refused")
        if parts.path not in self.bodies:
            raise AssertionError(f"Unexpected endpoint in fake backend: {parts.path}")
        return RawResponse(status=self.statuses.get(parts.path, 200), body=copy.deepcopy(self.bodies[parts.path]))


@pytest.fixture
def config() -> NiuConfig:
    return NiuConfig(
        account="rider@example.com",
        password="secret",
        country_code="49",
        api_key="shared-key",
    )


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeNiuBackend:
    fake_backend = FakeNiuBackend()

    async def fake_request(_self: Any, method: str, url: str, **kwargs: Any) -> RawResponse:
        return await fake_backend.request(method, url, **kwargs)

    monkeypatch.setattr("pyniu._transport.HttpTransport.request", fake_request)
    return fake_backend
