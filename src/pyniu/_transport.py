"""HTTP transport for the NIU cloud API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pyniu._redact import redact_for_log

_logger = logging.getLogger(__name__)


class TransportUnavailableError(Exception):
    """No HTTP response was received (connection, TLS or timeout failure)."""


@dataclass(frozen=True, slots=True)
class RawResponse:
    """What came back over the wire, before any interpretation.

    ``status`` is whatever the HTTP layer reported and ``body`` is the
    decoded JSON document, or ``None`` when the body was empty or not JSON.
    """

    status: Any
    body: Any


class Transport(Protocol):
    """Structural transport interface used by the request executor.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json_body: Mapping[str, Any] | None = None,
        form: Mapping[str, str] | None = None,
    ) -> RawResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport performing exactly one request per call."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json_body: Mapping[str, Any] | None = None,
        form: Mapping[str, str] | None = None,
    ) -> RawResponse:
        """Send one request and return its status and decoded JSON body.

        Raises
        ------
        TransportUnavailableError
            If no response was received.
        """
        _logger.debug("%s %s payload=%s", method, url, redact_for_log(json_body or form))

        kwargs: dict[str, Any] = {"headers": dict(headers)}
        if json_body is not None:
            kwargs["json"] = dict(json_body)
        elif form is not None:
            kwargs["data"] = dict(form)

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                payload = await resp.read()
                charset = resp.charset or "utf-8"
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportUnavailableError(f"Request to {url} failed: {exc!r}") from exc

        body: Any = None
        if payload.strip():
            try:
                body = json.loads(payload.decode(charset))
            except (UnicodeDecodeError, LookupError, json.JSONDecodeError):
                _logger.debug("Non-JSON body from %s: %r", url, payload[:200])

        _logger.debug("%s %s -> HTTP %s body=%s", method, url, status, redact_for_log(body))
        return RawResponse(status=status, body=body)
