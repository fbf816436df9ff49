"""Base model for NIU API responses.

Every vendor response model inherits from :class:`NiuBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` and empty
  sentinel strings so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# Strings the NIU API uses for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null"})


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    return isinstance(value, str) and value.strip() in _SENTINELS


class NiuBaseModel(BaseModel):
    """Base for NIU API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_missing(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        present = {key: value for key, value in values.items() if not _is_missing(value)}
        # An explicit raw= from the caller wins.
        present.setdefault("raw", dict(values))
        return present
