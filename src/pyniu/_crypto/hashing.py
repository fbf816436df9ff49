"""Hashing utilities for the shared API key."""

from __future__ import annotations

import hashlib
import hmac


def sha256_hex(value: str) -> str:
    """Compute SHA-256 hex digest (lowercase) of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def digests_match(candidate: str, expected: str) -> bool:
    """Compare a caller-supplied digest against the expected one in constant time."""
    if not candidate or not expected:
        return False
    return hmac.compare_digest(candidate.strip().lower().encode("utf-8"), expected.lower().encode("utf-8"))
