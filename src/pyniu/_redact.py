"""Redaction of credentials before payloads reach DEBUG logs.

Login forms carry the account password, every app API call carries the
session token in its headers, and the responder receives the API key
digest.  None of these may be logged verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"
_MAX_DEPTH = 20

# Compared after lowercasing and dropping "_" / "-", so "access_token",
# "accessToken" and "X-Api-Key" all match.
_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "accesstoken",
        "refreshtoken",
        "authorization",
        "cookie",
        "key",
        "apikey",
        "xapikey",
    }
)


def _is_secret_key(key: Any) -> bool:
    folded = str(key).lower().replace("_", "").replace("-", "")
    return folded in _SECRET_KEYS


def _walk(value: Any, max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        if value.lower().startswith("bearer "):
            return REDACTED
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _is_secret_key(k) else _walk(v, max_string, depth + 1) for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_walk(item, max_string, depth + 1) for item in value]
    return repr(value)


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a copy of *value* with secrets masked and long strings cut.

    Mapping entries whose key names a credential are replaced by
    ``"<redacted>"`` whatever their value; bearer strings are masked
    wherever they appear.
    """
    return _walk(value, max_string, 0)
