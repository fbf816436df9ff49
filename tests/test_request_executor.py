"""Tests for the request executor's layered failure handling."""

from __future__ import annotations

from typing import Any

import pytest

from pyniu._api._common import NO_VALID_SESSION, execute, interpret_response
from pyniu._transport import RawResponse, TransportUnavailableError
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor, ErrorKind
from pyniu.models.requests import EndpointResponse
from pyniu.session import Session


class _ScriptedTransport:
    def __init__(self, response: RawResponse | Exception) -> None:
        self._response = response
        self.calls: list[dict[str, Any]] = []

    async def request(self, method: str, url: str, **kwargs: Any) -> RawResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


@pytest.fixture
def config() -> NiuConfig:
    return NiuConfig(account="rider@example.com", password="secret", country_code="49")


@pytest.fixture
def session() -> Session:
    return Session(token="tok-1")


@pytest.mark.asyncio
async def test_success_wraps_raw_body(config: NiuConfig, session: Session) -> None:
    body = {"status": 0, "data": {"lat": 1.0}}
    transport = _ScriptedTransport(RawResponse(status=200, body=body))

    result = await execute(
        "/motoinfo/currentpos",
        payload={"sn": "SN1"},
        config=config,
        session=session,
        transport=transport,
        origin="get_vehicle_position",
    )

    assert isinstance(result, EndpointResponse)
    assert result.status == "success"
    assert result.body == body
    assert result.data == {"lat": 1.0}


@pytest.mark.asyncio
async def test_payload_switches_to_post_with_json_body(config: NiuConfig, session: Session) -> None:
    transport = _ScriptedTransport(RawResponse(status=200, body={"status": 0}))

    await execute("/motoinfo/list", payload={}, config=config, session=session, transport=transport, origin="o")

    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == f"{config.app_url}/motoinfo/list"
    assert call["json_body"] == {}


@pytest.mark.asyncio
async def test_no_payload_defaults_to_get(config: NiuConfig, session: Session) -> None:
    transport = _ScriptedTransport(RawResponse(status=200, body={"status": 0}))

    await execute("/v3/motor_data/motor_info?sn=SN1", config=config, session=session, transport=transport, origin="o")

    call = transport.calls[0]
    assert call["method"] == "GET"
    assert call["json_body"] is None


@pytest.mark.asyncio
async def test_token_is_sent_as_bearer_credential(config: NiuConfig, session: Session) -> None:
    transport = _ScriptedTransport(RawResponse(status=200, body={"status": 0}))

    await execute("/motoinfo/list", payload={}, config=config, session=session, transport=transport, origin="o")

    headers = transport.calls[0]["headers"]
    assert headers["token"] == "tok-1"
    assert headers["authorization"] == "Bearer tok-1"
    assert headers["accept-language"] == "en-US"


@pytest.mark.asyncio
async def test_missing_session_fails_before_io(config: NiuConfig) -> None:
    transport = _ScriptedTransport(RawResponse(status=200, body={"status": 0}))

    result = await execute(
        "/motoinfo/list",
        payload={},
        config=config,
        session=Session(),
        transport=transport,
        origin="get_vehicles",
    )

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.VALIDATION
    assert result.message == NO_VALID_SESSION
    assert result.origin_function == "get_vehicles"
    assert transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["", "   "])
async def test_empty_path_fails_before_io(config: NiuConfig, session: Session, path: str) -> None:
    transport = _ScriptedTransport(RawResponse(status=200, body={"status": 0}))

    result = await execute(path, config=config, session=session, transport=transport, origin="execute")

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.VALIDATION
    assert transport.calls == []


@pytest.mark.asyncio
async def test_transport_failure_is_reported_as_transport(config: NiuConfig, session: Session) -> None:
    transport = _ScriptedTransport(TransportUnavailableError("connection refused"))

    result = await execute(
        "/motoinfo/list",
        payload={},
        config=config,
        session=session,
        transport=transport,
        origin="get_vehicles",
    )

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.TRANSPORT
    assert result.origin_function == "get_vehicles"
    assert len(transport.calls) == 1


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        (RawResponse(status=None, body={"status": 0}), ErrorKind.PROTOCOL),
        (RawResponse(status="OK", body={"status": 0}), ErrorKind.PROTOCOL),
        (RawResponse(status=True, body={"status": 0}), ErrorKind.PROTOCOL),
        (RawResponse(status=404, body={"status": 0}), ErrorKind.PROTOCOL),
        (RawResponse(status=500, body=None), ErrorKind.PROTOCOL),
        (RawResponse(status=200, body=None), ErrorKind.VENDOR),
        (RawResponse(status=200, body={"status": 1131, "desc": "token invalid"}), ErrorKind.VENDOR),
        (RawResponse(status=200, body={"status": "2", "desc": "failed"}), ErrorKind.VENDOR),
        (RawResponse(status=200, body={"status": "bad"}), ErrorKind.VENDOR),
    ],
)
def test_malformed_responses_never_succeed(raw: RawResponse, kind: ErrorKind) -> None:
    result = interpret_response(raw, "get_overall_tally")

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is kind
    assert result.origin_function == "get_overall_tally"


def test_status_is_checked_before_body() -> None:
    result = interpret_response(RawResponse(status=503, body={"status": 1, "desc": "down"}), "o")

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.PROTOCOL


def test_vendor_failure_carries_body_as_cause() -> None:
    body = {"status": 1131, "desc": "token invalid"}
    result = interpret_response(RawResponse(status=200, body=body), "o")

    assert isinstance(result, ErrorDescriptor)
    assert result.error == body


def test_numeric_string_status_code_is_accepted() -> None:
    result = interpret_response(RawResponse(status="200", body={"status": "0", "data": []}), "o")

    assert isinstance(result, EndpointResponse)


@pytest.mark.parametrize("status", [float("inf"), float("-inf"), float("nan"), 1e400])
def test_non_finite_vendor_status_is_vendor_failure(status: float) -> None:
    result = interpret_response(RawResponse(status=200, body={"status": status}), "get_overall_tally")

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.VENDOR
