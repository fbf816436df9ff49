"""Tests for HttpTransport against a local aiohttp server."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pyniu._api._common import send
from pyniu._transport import HttpTransport, TransportUnavailableError
from pyniu.errors import ErrorDescriptor, ErrorKind


async def _json_ok(_request: web.Request) -> web.Response:
    return web.json_response({"status": 0, "data": {"lat": 52.52}})


async def _empty(_request: web.Request) -> web.Response:
    return web.Response(status=200, body=b"")


async def _html(_request: web.Request) -> web.Response:
    return web.Response(status=502, text="<html>Bad Gateway</html>", content_type="text/html")


async def _not_utf8(_request: web.Request) -> web.Response:
    return web.Response(status=200, body=b"\xff\xfe{", content_type="application/json", charset="utf-8")


async def _slow(_request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.json_response({"status": 0})


async def _echo(request: web.Request) -> web.Response:
    if request.content_type == "application/json":
        received = {"json": await request.json()}
    else:
        received = {"form": dict(await request.post())}
    return web.json_response(
        {
            "method": request.method,
            "contentType": request.content_type,
            "token": request.headers.get("token"),
            **received,
        }
    )


@pytest_asyncio.fixture
async def server() -> AsyncIterator[TestServer]:
    app = web.Application()
    app.router.add_get("/json", _json_ok)
    app.router.add_get("/empty", _empty)
    app.router.add_get("/html", _html)
    app.router.add_get("/not-utf8", _not_utf8)
    app.router.add_get("/slow", _slow)
    app.router.add_post("/echo", _echo)
    test_server = TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest_asyncio.fixture
async def transport() -> AsyncIterator[HttpTransport]:
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=0.2)) as http:
        yield HttpTransport(http)


@pytest.mark.asyncio
async def test_json_body_is_decoded(server: TestServer, transport: HttpTransport) -> None:
    raw = await transport.request("GET", str(server.make_url("/json")), headers={})

    assert raw.status == 200
    assert raw.body == {"status": 0, "data": {"lat": 52.52}}


@pytest.mark.asyncio
@pytest.mark.parametrize(("path", "status"), [("/empty", 200), ("/html", 502), ("/not-utf8", 200)])
async def test_unusable_body_becomes_none(
    server: TestServer,
    transport: HttpTransport,
    path: str,
    status: int,
) -> None:
    raw = await transport.request("GET", str(server.make_url(path)), headers={})

    assert raw.status == status
    assert raw.body is None


@pytest.mark.asyncio
async def test_undecodable_body_is_vendor_failure(server: TestServer, transport: HttpTransport) -> None:
    result = await send(transport, "GET", str(server.make_url("/not-utf8")), "get_battery_info", headers={})

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.VENDOR
    assert result.origin_function == "get_battery_info"


@pytest.mark.asyncio
async def test_json_payload_is_sent_as_json(server: TestServer, transport: HttpTransport) -> None:
    raw = await transport.request(
        "POST",
        str(server.make_url("/echo")),
        headers={"token": "tok-1"},
        json_body={"sn": "SN1", "index": 0},
    )

    assert raw.body == {
        "method": "POST",
        "contentType": "application/json",
        "token": "tok-1",
        "json": {"sn": "SN1", "index": 0},
    }


@pytest.mark.asyncio
async def test_form_payload_is_form_encoded(server: TestServer, transport: HttpTransport) -> None:
    raw = await transport.request(
        "POST",
        str(server.make_url("/echo")),
        headers={},
        form={"account": "rider@example.com", "password": " pw "},
    )

    assert raw.body["contentType"] == "application/x-www-form-urlencoded"
    assert raw.body["form"] == {"account": "rider@example.com", "password": " pw "}


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error(server: TestServer, transport: HttpTransport) -> None:
    url = str(server.make_url("/json"))
    await server.close()

    with pytest.raises(TransportUnavailableError):
        await transport.request("GET", url, headers={})


@pytest.mark.asyncio
async def test_timeout_raises_transport_error(server: TestServer, transport: HttpTransport) -> None:
    with pytest.raises(TransportUnavailableError):
        await transport.request("GET", str(server.make_url("/slow")), headers={})


@pytest.mark.asyncio
async def test_connection_failure_is_transport_failure(server: TestServer, transport: HttpTransport) -> None:
    url = str(server.make_url("/json"))
    await server.close()

    result = await send(transport, "GET", url, "get_vehicles", headers={})

    assert isinstance(result, ErrorDescriptor)
    assert result.kind is ErrorKind.TRANSPORT
