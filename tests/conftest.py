"""Shared fixtures for verstore tests."""

from __future__ import annotations

import pytest

from verstore import VersionStore


@pytest.fixture
def store() -> VersionStore:
    """Empty store with the default capacity."""
    return VersionStore(capacity=10)


@pytest.fixture
def small_store() -> VersionStore:
    """Store with capacity 2 holding versions 1 to 3 (version 1 evicted)."""
    store = VersionStore(capacity=2)
    store.append("v1", "init")
    store.append("v2", "edit")
    store.append("v3", "edit2")
    return store


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep VERSTORE_* variables from the outer environment out of tests."""
    for key in (
        "VERSTORE_CAPACITY",
        "VERSTORE_SEED_CONTENT",
        "VERSTORE_MAX_CONTENT_LENGTH",
        "VERSTORE_MAX_LOG_LENGTH",
        "VERSTORE_SNAPSHOT_PATH",
        "VERSTORE_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
