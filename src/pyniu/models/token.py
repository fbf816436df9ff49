"""Authentication token model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class AuthToken(BaseModel):
    """Token returned by a successful login.

    The vendor sends ``data.token`` either as a plain string or as an
    object with an ``access_token`` member; both are accepted.

    Parameters
    ----------
    token : str
        Opaque session token.
    raw : dict
        Full decoded ``data`` dict for access to additional fields.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str
    raw: dict[str, Any]

    @model_validator(mode="before")
    @classmethod
    def _unwrap_token(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        token = values.get("token")
        if isinstance(token, dict):
            merged["token"] = token.get("access_token") or token.get("token")
        return merged

    @field_validator("token")
    @classmethod
    def _token_non_empty(cls, value: str) -> str:
        token = value.strip()
        if not token:
            raise ValueError("token must be non-empty")
        return token
