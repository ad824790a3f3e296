"""Thread-safe wrapper for the version store.

VersionStore defines no locking of its own. SynchronizedVersionStore puts
a single reentrant lock around every operation so that one store can be
shared between threads. Reads are serialized with writes, so no read ever
observes an append that is half done.

Example:
    >>> from verstore import VersionStore
    >>> from verstore.concurrency import SynchronizedVersionStore
    >>>
    >>> shared = SynchronizedVersionStore(VersionStore(capacity=10))
    >>> shared.append("draft", "first draft")
    1
    >>> with shared.locked() as store:
    ...     # Several operations as one critical section
    ...     if store.current_view().content != "final":
    ...         store.append("final", "finalize")
    2
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator

from verstore.base import CurrentView, LogEntry, VersionRecord
from verstore.store import VersionStore


class SynchronizedVersionStore:
    """VersionStore guarded by one exclusive lock."""

    def __init__(self, store: VersionStore) -> None:
        """Initialize the wrapper.

        Args:
            store: The store to guard. It must not be used directly while
                wrapped.
        """
        self._store = store
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[VersionStore]:
        """Hold the lock and yield the underlying store."""
        with self._lock:
            yield self._store

    def append(self, new_content: str, log: str) -> int:
        with self._lock:
            return self._store.append(new_content, log)

    def find(self, version_id: int) -> VersionRecord | None:
        with self._lock:
            return self._store.find(version_id)

    def get(self, version_id: int) -> VersionRecord:
        with self._lock:
            return self._store.get(version_id)

    def reconstruct(self, version_id: int) -> str:
        with self._lock:
            return self._store.reconstruct(version_id)

    def all_logs(self) -> list[LogEntry]:
        with self._lock:
            return self._store.all_logs()

    def current_view(self) -> CurrentView:
        with self._lock:
            return self._store.current_view()

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            return self._store.to_dict()

    def close(self) -> None:
        with self._lock:
            self._store.close()

    @property
    def capacity(self) -> int:
        return self._store.capacity

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._store.next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __enter__(self) -> "SynchronizedVersionStore":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
