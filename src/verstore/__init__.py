"""verstore - Bounded version history for a single document.

Example:
    >>> from verstore import VersionStore
    >>>
    >>> store = VersionStore(capacity=3, seed_content="x")
    >>> store.append("x", "noop")
    1
    >>> store.reconstruct(1)
    ''
    >>> store.append("y", "edit")
    2
    >>> [entry.summary for entry in store.all_logs()]
    ['NO_CHANGE', 'MODIFIED: x -> y']
"""

from verstore.base import (
    ChangeDescriptor,
    ChangeKind,
    CurrentView,
    HistoryConfig,
    HistoryIntegrityError,
    InvalidCapacityError,
    LogEntry,
    SnapshotError,
    StoreClosedError,
    VersioningError,
    VersionNotFoundError,
    VersionRecord,
)
from verstore.concurrency import SynchronizedVersionStore
from verstore.config import get_default_config
from verstore.descriptors import compare
from verstore.export import history_frame
from verstore.persistence import load_snapshot, save_snapshot
from verstore.store import VersionStore

__version__ = "0.1.0"

__all__ = [
    # Core types
    "ChangeDescriptor",
    "ChangeKind",
    "CurrentView",
    "HistoryConfig",
    "LogEntry",
    "VersionRecord",
    # Exceptions
    "VersioningError",
    "InvalidCapacityError",
    "VersionNotFoundError",
    "HistoryIntegrityError",
    "SnapshotError",
    "StoreClosedError",
    # Store
    "VersionStore",
    "SynchronizedVersionStore",
    "compare",
    "history_frame",
    # Configuration and persistence
    "get_default_config",
    "load_snapshot",
    "save_snapshot",
]
