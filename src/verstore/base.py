"""Base types for bounded document version history.

This module defines the exceptions, value types and configuration shared by
the version store, its persistence layer and the command-line front end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


# =============================================================================
# Exceptions
# =============================================================================


class VersioningError(Exception):
    """Base exception for versioning-related errors."""

    pass


class InvalidCapacityError(VersioningError, ValueError):
    """Raised when a store is created with a non-positive capacity."""

    def __init__(self, capacity: Any) -> None:
        self.capacity = capacity
        super().__init__(f"Capacity must be a positive integer, got {capacity!r}")


class VersionNotFoundError(VersioningError, LookupError):
    """Raised when a version is not in the retained window."""

    def __init__(self, version_id: int) -> None:
        self.version_id = version_id
        super().__init__(f"Version {version_id} not found")


class HistoryIntegrityError(VersioningError):
    """Raised when the record sequence violates a store invariant."""

    pass


class SnapshotError(VersioningError):
    """Raised when a persisted snapshot cannot be read or written."""

    pass


class StoreClosedError(VersioningError):
    """Raised when a closed store is used."""

    def __init__(self) -> None:
        super().__init__("Version store is closed")


# =============================================================================
# Enums
# =============================================================================


class ChangeKind(Enum):
    """Kind of change between two consecutive contents."""

    NO_CHANGE = "no_change"
    MODIFIED = "modified"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class ChangeDescriptor:
    """Change between the previous content and the appended content.

    A ``MODIFIED`` descriptor carries both complete contents, not a patch.

    Attributes:
        kind: Whether the content changed.
        before: Content before the change (``None`` for ``NO_CHANGE``).
        after: Content after the change (``None`` for ``NO_CHANGE``).
    """

    kind: ChangeKind
    before: str | None = None
    after: str | None = None

    def __post_init__(self) -> None:
        for value in (self.before, self.after):
            if value is not None and not isinstance(value, str):
                raise TypeError(
                    f"Descriptor content must be str, got {type(value).__name__}"
                )
        if self.kind is ChangeKind.MODIFIED:
            if self.before is None or self.after is None:
                raise ValueError("MODIFIED descriptor requires before and after")
            if self.before == self.after:
                raise ValueError("MODIFIED descriptor requires differing contents")
        elif self.before is not None or self.after is not None:
            raise ValueError("NO_CHANGE descriptor carries no content")

    @classmethod
    def no_change(cls) -> "ChangeDescriptor":
        """Create a ``NO_CHANGE`` descriptor."""
        return cls(ChangeKind.NO_CHANGE)

    @classmethod
    def modified(cls, before: str, after: str) -> "ChangeDescriptor":
        """Create a ``MODIFIED`` descriptor."""
        return cls(ChangeKind.MODIFIED, before, after)

    @property
    def is_modified(self) -> bool:
        return self.kind is ChangeKind.MODIFIED

    @property
    def summary(self) -> str:
        """Human-readable one-line description."""
        if self.is_modified:
            return f"MODIFIED: {self.before} -> {self.after}"
        return "NO_CHANGE"

    def __str__(self) -> str:
        return self.summary

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "before": self.before,
            "after": self.after,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChangeDescriptor":
        """Create from dictionary."""
        return cls(
            kind=ChangeKind(data["kind"]),
            before=data.get("before"),
            after=data.get("after"),
        )


@dataclass(frozen=True)
class VersionRecord:
    """One retained entry of the version history.

    Records are created by ``VersionStore.append`` and never mutated.

    Attributes:
        version_id: Store-wide unique, strictly increasing identifier.
        descriptor: Change relative to the previously current content.
        change_log: Free-form description supplied by the caller.
        created_at: When the record was appended.
    """

    version_id: int
    descriptor: ChangeDescriptor
    change_log: str
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "version_id": self.version_id,
            "descriptor": self.descriptor.to_dict(),
            "change_log": self.change_log,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VersionRecord":
        """Create from dictionary."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        elif created_at is None:
            created_at = datetime.now()
        elif not isinstance(created_at, datetime):
            raise TypeError(
                f"created_at must be an ISO timestamp, got {type(created_at).__name__}"
            )

        change_log = data.get("change_log", "")
        if not isinstance(change_log, str):
            raise TypeError(f"change_log must be str, got {type(change_log).__name__}")

        return cls(
            version_id=int(data["version_id"]),
            descriptor=ChangeDescriptor.from_dict(data["descriptor"]),
            change_log=change_log,
            created_at=created_at,
        )


@dataclass(frozen=True)
class LogEntry:
    """Read-only view of a record as listed by ``VersionStore.all_logs``."""

    version_id: int
    change_log: str
    summary: str
    kind: ChangeKind
    created_at: datetime

    @classmethod
    def from_record(cls, record: VersionRecord) -> "LogEntry":
        return cls(
            version_id=record.version_id,
            change_log=record.change_log,
            summary=record.descriptor.summary,
            kind=record.descriptor.kind,
            created_at=record.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "version_id": self.version_id,
            "change_log": self.change_log,
            "summary": self.summary,
            "kind": self.kind.value,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class CurrentView:
    """Current content and number of retained records."""

    content: str
    count: int


@dataclass
class HistoryConfig:
    """Configuration for a version history.

    Attributes:
        capacity: Maximum number of retained records.
        seed_content: Content that is current before the first append.
        max_content_length: Longest content accepted from text input.
        max_log_length: Longest change log accepted from text input.
        snapshot_path: Where the command-line front end keeps its snapshot.
        log_level: Logging level name used by the command-line front end.
    """

    capacity: int = 10
    seed_content: str = ""
    max_content_length: int = 1023
    max_log_length: int = 255
    snapshot_path: str | None = None
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            InvalidCapacityError: If capacity is not a positive integer.
            ValueError: If an input length limit is not positive or the log
                level is unknown.
        """
        validate_capacity(self.capacity)
        if self.max_content_length <= 0:
            raise ValueError("max_content_length must be positive")
        if self.max_log_length <= 0:
            raise ValueError("max_log_length must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def validate_capacity(capacity: Any) -> int:
    """Return ``capacity`` if it is a positive integer.

    Raises:
        InvalidCapacityError: Otherwise.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidCapacityError(capacity)
    return capacity
