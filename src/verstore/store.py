"""Bounded version store implementation.

This module provides the VersionStore class, which keeps the most recent
``capacity`` versions of a single document together with a change log.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterator

from verstore.base import (
    CurrentView,
    HistoryConfig,
    HistoryIntegrityError,
    LogEntry,
    StoreClosedError,
    VersionNotFoundError,
    VersionRecord,
    validate_capacity,
)
from verstore.descriptors import compare

logger = logging.getLogger(__name__)


class VersionStore:
    """Bounded, ordered history of a single document's contents.

    Records are kept oldest (head) to newest (tail). Each append assigns the
    next identifier from a counter that starts at 1 and is never reused,
    and evicts the head record once the retained window exceeds capacity.

    The store does no locking of its own; wrap it in
    ``SynchronizedVersionStore`` when it is shared between threads.

    Example:
        >>> store = VersionStore(capacity=2)
        >>> store.append("v1", "init")
        1
        >>> store.append("v2", "edit")
        2
        >>> store.append("v3", "edit2")
        3
        >>> store.find(1) is None
        True
        >>> store.reconstruct(2)
        'v2'
        >>> store.current_view()
        CurrentView(content='v3', count=2)
    """

    def __init__(self, capacity: int, seed_content: str = "") -> None:
        """Initialize the store.

        Args:
            capacity: Maximum number of retained records.
            seed_content: Content considered current before the first append.

        Raises:
            InvalidCapacityError: If capacity is not a positive integer.
        """
        self._capacity = validate_capacity(capacity)
        self._records: deque[VersionRecord] = deque()
        self._current_content = seed_content
        self._next_id = 1
        self._closed = False

    @classmethod
    def from_config(cls, config: HistoryConfig) -> "VersionStore":
        """Create a store from a HistoryConfig."""
        config.validate()
        return cls(config.capacity, config.seed_content)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def next_id(self) -> int:
        """Identifier the next append will receive."""
        return self._next_id

    @property
    def head_id(self) -> int | None:
        """Identifier of the oldest retained record."""
        self._check_open()
        return self._records[0].version_id if self._records else None

    @property
    def tail_id(self) -> int | None:
        """Identifier of the newest retained record."""
        self._check_open()
        return self._records[-1].version_id if self._records else None

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise StoreClosedError()

    # -------------------------------------------------------------------------
    # Core Operations
    # -------------------------------------------------------------------------

    def append(self, new_content: str, log: str) -> int:
        """Append a new version.

        The new content becomes current even when it equals the previous
        content, in which case the record carries a ``NO_CHANGE`` descriptor.

        Args:
            new_content: Full content of the document.
            log: Description of the change.

        Returns:
            Identifier of the new record.
        """
        self._check_open()

        descriptor = compare(self._current_content, new_content)
        record = VersionRecord(
            version_id=self._next_id,
            descriptor=descriptor,
            change_log=log,
        )

        self._records.append(record)
        self._next_id += 1
        self._current_content = new_content

        if len(self._records) > self._capacity:
            evicted = self._records.popleft()
            logger.info(
                "Evicted version %d (capacity %d)",
                evicted.version_id,
                self._capacity,
            )

        logger.debug("Created version %d (%s)", record.version_id, descriptor.kind.value)
        return record.version_id

    def find(self, version_id: int) -> VersionRecord | None:
        """Look up a retained record by identifier.

        Returns:
            The record, or None if it was never created or has been evicted.
        """
        self._check_open()
        for record in self._records:
            if record.version_id == version_id:
                return record
        return None

    def get(self, version_id: int) -> VersionRecord:
        """Look up a retained record, raising if it is absent.

        Raises:
            VersionNotFoundError: If the record is not retained.
        """
        record = self.find(version_id)
        if record is None:
            raise VersionNotFoundError(version_id)
        return record

    def reconstruct(self, version_id: int) -> str:
        """Recover the content of a retained version.

        Walks the retained records from the head up to and including the
        target. Every ``MODIFIED`` record replaces the working content with
        its ``after`` content, so the answer is the last modification at or
        before the target. If no ``MODIFIED`` record precedes the target in
        the retained window the result is the empty string.

        Args:
            version_id: Identifier of the version to reconstruct.

        Returns:
            Content as of that version.

        Raises:
            VersionNotFoundError: If the version is not retained.
        """
        if self.find(version_id) is None:
            raise VersionNotFoundError(version_id)

        result = ""
        for record in self._records:
            if record.descriptor.is_modified:
                result = record.descriptor.after
            if record.version_id == version_id:
                logger.debug("Reconstructed version %d", version_id)
                return result

        # find() succeeded, so the walk must reach the target
        raise HistoryIntegrityError(
            f"Version {version_id} was found but not reached while reconstructing"
        )

    def all_logs(self) -> list[LogEntry]:
        """List the change log of every retained record, oldest first."""
        self._check_open()
        return [LogEntry.from_record(record) for record in self._records]

    def current_view(self) -> CurrentView:
        """Get the current content and the number of retained records."""
        self._check_open()
        return CurrentView(content=self._current_content, count=len(self._records))

    def close(self) -> None:
        """Release all records. The store must not be used afterwards."""
        if self._closed:
            return
        released = len(self._records)
        self._records.clear()
        self._closed = True
        logger.info("Closed version store (%d records released)", released)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert to the minimal dictionary needed to resume the store."""
        self._check_open()
        return {
            "capacity": self._capacity,
            "next_id": self._next_id,
            "current_content": self._current_content,
            "records": [record.to_dict() for record in self._records],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VersionStore":
        """Restore a store from ``to_dict`` output.

        Raises:
            InvalidCapacityError: If the stored capacity is not positive.
            HistoryIntegrityError: If the records violate store invariants.
            TypeError: If a field has the wrong type.
        """
        current_content = data.get("current_content", "")
        if not isinstance(current_content, str):
            raise TypeError(
                f"current_content must be str, got {type(current_content).__name__}"
            )

        store = cls(data["capacity"], current_content)
        records = [VersionRecord.from_dict(item) for item in data.get("records", [])]
        next_id = int(data.get("next_id", 1))

        if len(records) > store.capacity:
            raise HistoryIntegrityError(
                f"{len(records)} records exceed capacity {store.capacity}"
            )

        previous_id = 0
        for record in records:
            if record.version_id <= previous_id:
                raise HistoryIntegrityError(
                    f"Version ids are not strictly increasing at {record.version_id}"
                )
            previous_id = record.version_id

        if next_id <= previous_id:
            raise HistoryIntegrityError(
                f"next_id {next_id} must exceed the newest version id {previous_id}"
            )

        # Content before the head is unknown once the head has been evicted
        content: str | None = None
        for record in records:
            descriptor = record.descriptor
            if not descriptor.is_modified:
                continue
            if content is not None and descriptor.before != content:
                raise HistoryIntegrityError(
                    f"Version {record.version_id} does not follow the content "
                    "of the previous version"
                )
            content = descriptor.after

        if content is not None and content != store._current_content:
            raise HistoryIntegrityError(
                "Current content does not match the newest version"
            )

        store._records.extend(records)
        store._next_id = next_id
        return store

    # -------------------------------------------------------------------------
    # Container Protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[VersionRecord]:
        self._check_open()
        return iter(list(self._records))

    def __enter__(self) -> "VersionStore":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return (
            f"VersionStore(capacity={self._capacity}, "
            f"records={len(self._records)}, next_id={self._next_id})"
        )
