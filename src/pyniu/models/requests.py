"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
Accessors validate their parameters through them before any I/O, and
the request executor consumes :class:`EndpointRequest`.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

_TRACK_DATE_RE = re.compile(r"^\d{8}$")


class HttpMethod(enum.StrEnum):
    GET = "GET"
    POST = "POST"


class EndpointRequest(BaseModel):
    """A single call against the vendor's app API.

    ``method`` defaults to ``GET``, or ``POST`` when a payload is given.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    method: HttpMethod = HttpMethod.GET
    payload: Mapping[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_method(cls, values: Any) -> Any:
        if not isinstance(values, dict) or values.get("method") is not None:
            return values
        merged = dict(values)
        merged["method"] = HttpMethod.POST if values.get("payload") is not None else HttpMethod.GET
        return merged

    @field_validator("path")
    @classmethod
    def _path_non_empty(cls, value: str) -> str:
        path = value.strip()
        if not path:
            raise ValueError("path must be non-empty")
        return path


class EndpointResponse(BaseModel):
    """Successful outcome of the request executor, wrapping the raw body."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    body: Any = None

    @property
    def data(self) -> Any:
        """The vendor's ``data`` member, or ``None``."""
        if isinstance(self.body, dict):
            return self.body.get("data")
        return None


class _StrictRequest(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
        strict=True,
    )


class LoginRequest(_StrictRequest):
    """Credentials for ``/appv2/login``.

    The password is sent exactly as given; account and country code are
    trimmed.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    account: str
    password: str
    country_code: str

    @field_validator("account", "password", "country_code")
    @classmethod
    def _non_empty(cls, value: str, info: ValidationInfo) -> str:
        if info.field_name != "password":
            value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} must be non-empty")
        return value


class SessionTokenRequest(_StrictRequest):
    token: str

    @field_validator("token")
    @classmethod
    def _token_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("token must be non-empty")
        return value


class SerialNumberRequest(_StrictRequest):
    """Request containing a vehicle serial number."""

    sn: str

    @field_validator("sn")
    @classmethod
    def _sn_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("sn must be non-empty")
        return value


class TrackListRequest(SerialNumberRequest):
    index: int = Field(ge=0)
    page_size: int = Field(ge=1)


class TrackDetailRequest(SerialNumberRequest):
    track_id: str
    track_date: str

    @field_validator("track_id")
    @classmethod
    def _track_id_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("track_id must be non-empty")
        return value

    @field_validator("track_date")
    @classmethod
    def _track_date_format(cls, value: str) -> str:
        if not _TRACK_DATE_RE.match(value):
            raise ValueError("track_date must be formatted as YYYYMMDD")
        return value
