"""Hashing helpers for pyniu."""

from pyniu._crypto.hashing import digests_match, sha256_hex

__all__ = ["digests_match", "sha256_hex"]
