"""JSON snapshot persistence for version stores.

A snapshot holds exactly what is needed to resume a store: its capacity,
the next identifier, the current content and the ordered retained records.

Example:
    >>> from verstore import VersionStore
    >>> from verstore.persistence import load_snapshot, save_snapshot
    >>>
    >>> store = VersionStore(capacity=5)
    >>> store.append("hello", "init")
    1
    >>> save_snapshot(store, "history.json")
    >>> restored = load_snapshot("history.json")
    >>> restored.reconstruct(1)
    'hello'
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from verstore.base import SnapshotError, VersioningError
from verstore.store import VersionStore

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT = "verstore.snapshot"
SNAPSHOT_VERSION = 1


def snapshot_to_dict(store: VersionStore) -> dict[str, Any]:
    """Wrap a store's state in a versioned snapshot envelope."""
    return {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "store": store.to_dict(),
    }


def snapshot_from_dict(data: dict[str, Any]) -> VersionStore:
    """Restore a store from a snapshot envelope.

    Raises:
        SnapshotError: If the envelope is not a supported snapshot.
        HistoryIntegrityError: If the stored records violate store invariants.
    """
    if not isinstance(data, dict) or data.get("format") != SNAPSHOT_FORMAT:
        raise SnapshotError("Not a verstore snapshot")
    if data.get("version") != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {data.get('version')}")

    try:
        return VersionStore.from_dict(data["store"])
    except VersioningError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}") from e


def save_snapshot(store: VersionStore, path: str | Path) -> Path:
    """Write a store snapshot to a JSON file.

    The file is replaced atomically so a failed write never leaves a
    truncated snapshot behind.

    Args:
        store: Store to persist.
        path: Destination file.

    Returns:
        The path written.

    Raises:
        SnapshotError: If the file cannot be written.
    """
    path = Path(path)
    data = snapshot_to_dict(store)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise SnapshotError(f"Failed to write snapshot {path}: {e}") from e

    logger.info("Saved snapshot with %d versions to %s", len(store), path)
    return path


def load_snapshot(path: str | Path) -> VersionStore:
    """Read a store snapshot from a JSON file.

    Raises:
        SnapshotError: If the file is missing, unreadable or malformed.
        HistoryIntegrityError: If the stored records violate store invariants.
    """
    path = Path(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SnapshotError(f"Snapshot not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Failed to read snapshot {path}: {e}") from e

    store = snapshot_from_dict(data)
    logger.info("Loaded snapshot with %d versions from %s", len(store), path)
    return store
