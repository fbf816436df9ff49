"""Shared helpers for NIU API endpoint modules.

This module centralizes the most repeated patterns:
- validating accessor parameters before any I/O
- building the common request headers
- issuing one request and interpreting its outcome (the request executor)
- validating the vendor's ``data`` member into a response model

Every helper returns an :class:`~pyniu.errors.ErrorDescriptor` instead of
raising.  It is internal to pyniu and may change at any time.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from pyniu._constants import SUCCESS_STATUS_CODE, USER_AGENT, VENDOR_SUCCESS_STATUS
from pyniu._normalize import safe_int
from pyniu._transport import RawResponse, Transport, TransportUnavailableError
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor, ErrorKind, normalize_error
from pyniu.models.requests import EndpointRequest, EndpointResponse

if TYPE_CHECKING:
    from pyniu.session import Session

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)

NO_VALID_SESSION = "No valid session"


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for item in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in item.get("loc", ())) or "request"
        parts.append(f"{loc}: {item.get('msg', 'invalid')}")
    return "; ".join(parts)


def validate_params(model_cls: type[TModel], origin: str, **params: Any) -> TModel | ErrorDescriptor:
    """Validate accessor parameters, returning a validation failure on error."""
    try:
        return model_cls.model_validate(params)
    except ValidationError as exc:
        return normalize_error(_describe_validation_error(exc), origin, ErrorKind.VALIDATION)


def build_headers(config: NiuConfig, token: str | None = None) -> dict[str, str]:
    """Build headers sent with every request; *token* adds the credentials."""
    headers = {
        "accept-language": config.language,
        "user-agent": USER_AGENT,
    }
    if token:
        headers["token"] = token
        headers["authorization"] = f"Bearer {token}"
    return headers


def _parse_status(status: Any) -> int | None:
    if isinstance(status, bool):
        return None
    if isinstance(status, int):
        return status
    if isinstance(status, str) and status.strip().isdigit():
        return int(status)
    return None


def interpret_response(raw: RawResponse, origin: str) -> EndpointResponse | ErrorDescriptor:
    """Check the status code, then the body, in that order."""
    status = _parse_status(raw.status)
    if status is None:
        return normalize_error(f"Missing or invalid status code: {raw.status!r}", origin, ErrorKind.PROTOCOL)
    if status != SUCCESS_STATUS_CODE:
        return normalize_error(f"Unexpected status code {status}", origin, ErrorKind.PROTOCOL)

    body = raw.body
    if body is None:
        return normalize_error("Response body is missing", origin, ErrorKind.VENDOR)
    if isinstance(body, Mapping) and "status" in body:
        if safe_int(body["status"]) != VENDOR_SUCCESS_STATUS:
            return normalize_error(body, origin, ErrorKind.VENDOR)

    return EndpointResponse(body=body)


async def send(
    transport: Transport,
    method: str,
    url: str,
    origin: str,
    *,
    headers: Mapping[str, str],
    json_body: Mapping[str, Any] | None = None,
    form: Mapping[str, str] | None = None,
) -> EndpointResponse | ErrorDescriptor:
    """Issue exactly one request and interpret the outcome."""
    try:
        raw = await transport.request(method, url, headers=headers, json_body=json_body, form=form)
    except TransportUnavailableError as exc:
        _logger.debug("%s: no response received", origin, exc_info=True)
        return normalize_error(str(exc), origin, ErrorKind.TRANSPORT)
    return interpret_response(raw, origin)


async def execute(
    path: str,
    method: str | None = None,
    payload: Mapping[str, Any] | None = None,
    *,
    config: NiuConfig,
    session: Session,
    transport: Transport,
    origin: str,
) -> EndpointResponse | ErrorDescriptor:
    """Issue one authenticated call against the app API.

    The method defaults to ``GET``, or ``POST`` when a payload is supplied.
    Fails fast, without I/O, on an empty path or when no session token is set.
    """
    request = validate_params(EndpointRequest, origin, path=path, method=method, payload=payload)
    if isinstance(request, ErrorDescriptor):
        return request
    if not session.is_authenticated:
        return normalize_error(NO_VALID_SESSION, origin, ErrorKind.VALIDATION)

    url = f"{config.app_url}{request.path}"
    return await send(
        transport,
        request.method.value,
        url,
        origin,
        headers=build_headers(config, session.token),
        json_body=request.payload,
    )


def parse_data(response: EndpointResponse, model_cls: type[TModel], origin: str) -> TModel | ErrorDescriptor:
    """Validate the vendor's ``data`` member into *model_cls*."""
    data = response.data
    if not isinstance(data, dict):
        return normalize_error("Response has no data object", origin, ErrorKind.VENDOR)
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        return normalize_error(
            {
                "message": f"Unexpected response shape for {origin}",
                "errors": json.loads(exc.json(include_url=False)),
            },
            origin,
            ErrorKind.VENDOR,
        )
