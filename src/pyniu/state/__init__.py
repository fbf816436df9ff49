"""State layer.

Holds the last published vehicle snapshot for the local responder.
"""

from pyniu.state.store import SnapshotStore

__all__ = ["SnapshotStore"]
