"""Uniform error descriptors.

Every failure in pyniu, whether it started in parameter validation, the
network, the HTTP layer or the vendor's own status field, is returned to
the caller as one of the :class:`ErrorDescriptor` variants below.  They
are plain frozen models, not exceptions: callers branch with
``isinstance(result, ErrorDescriptor)``.

All variants are built through :func:`normalize_error`.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

INVALID_ERROR_INFO = "Invalid error info"


class ErrorKind(enum.StrEnum):
    """Origin of a failure."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    VENDOR = "vendor"


def _utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


class ErrorDescriptor(BaseModel):
    """Base shape shared by every failure variant.

    Parameters
    ----------
    origin_function : str
        Name of the operation or pipeline state that produced the failure.
    timestamp : str
        ISO-8601 UTC wall-clock time at which the failure was normalized.
    error : dict
        ``{"message": ...}`` for plain failures, or the structured cause
        (e.g. the vendor's response body) passed through unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ErrorKind
    origin_function: str
    timestamp: str = Field(default_factory=_utcnow_iso)
    error: dict[str, Any] = Field(default_factory=dict)

    @property
    def message(self) -> str | None:
        """The plain message of the cause, if it carries one."""
        value = self.error.get("message")
        if value is None:
            value = self.error.get("desc")
        return value if isinstance(value, str) else None


class ValidationFailure(ErrorDescriptor):
    """A caller-supplied parameter was missing or malformed; no I/O was done."""

    kind: Literal[ErrorKind.VALIDATION] = ErrorKind.VALIDATION


class TransportFailure(ErrorDescriptor):
    """No response was received from the vendor."""

    kind: Literal[ErrorKind.TRANSPORT] = ErrorKind.TRANSPORT


class ProtocolFailure(ErrorDescriptor):
    """The HTTP status code was absent or not the expected one."""

    kind: Literal[ErrorKind.PROTOCOL] = ErrorKind.PROTOCOL


class VendorFailure(ErrorDescriptor):
    """Well-formed HTTP response, but the vendor reported a failure or the body was unusable."""

    kind: Literal[ErrorKind.VENDOR] = ErrorKind.VENDOR


AnyFailure = Annotated[
    ValidationFailure | TransportFailure | ProtocolFailure | VendorFailure,
    Field(discriminator="kind"),
]
"""Discriminated union of all failure variants, for (de)serialization."""

_VARIANTS: dict[ErrorKind, type[ErrorDescriptor]] = {
    ErrorKind.VALIDATION: ValidationFailure,
    ErrorKind.TRANSPORT: TransportFailure,
    ErrorKind.PROTOCOL: ProtocolFailure,
    ErrorKind.VENDOR: VendorFailure,
}


def _coerce_cause(cause: Any) -> dict[str, Any]:
    if isinstance(cause, str):
        return {"message": cause}
    if isinstance(cause, Mapping):
        return dict(cause)
    return {"message": INVALID_ERROR_INFO}


def normalize_error(
    cause: Any,
    origin_function: str,
    kind: ErrorKind = ErrorKind.VENDOR,
) -> ErrorDescriptor:
    """Build the error descriptor for *cause*.

    A string is wrapped as ``{"message": cause}``, a mapping is passed
    through as-is, anything else becomes a generic "invalid error info"
    message.  The current time and *origin_function* are always stamped.
    """
    return _VARIANTS[kind](
        origin_function=origin_function,
        error=_coerce_cause(cause),
    )


def describe_error(error: Any) -> str:
    """Render an error descriptor as human-readable text for logs.

    A cause with only a string ``message`` is returned directly, any other
    structured cause is pretty-printed as JSON, and anything else is
    ``"Unknown"``.
    """
    if not isinstance(error, ErrorDescriptor):
        return "Unknown"
    cause = error.error
    if not cause:
        return "Unknown"
    message = cause.get("message")
    if isinstance(message, str) and len(cause) == 1:
        return message
    return json.dumps(cause, indent=4, default=str, ensure_ascii=False)
