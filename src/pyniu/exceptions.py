"""Exception hierarchy for pyniu.

Vendor and network failures are never raised; they come back as
:class:`pyniu.errors.ErrorDescriptor` values.  The exceptions below cover
misuse of the library itself.
"""

from __future__ import annotations


class NiuError(Exception):
    """Base exception for all pyniu errors."""


class NiuConfigError(NiuError):
    """Invalid or missing configuration."""
