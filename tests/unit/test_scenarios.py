"""End-to-end history scenarios."""

from __future__ import annotations

import pytest

from verstore import ChangeKind, CurrentView, VersionNotFoundError, VersionStore


class TestScenarios:
    """Scenarios covering eviction and the empty reconstruction result."""

    def test_sliding_window(self) -> None:
        """Test capacity 2 with three appends."""
        store = VersionStore(capacity=2)

        assert store.append("v1", "init") == 1
        assert store.append("v2", "edit") == 2
        assert store.append("v3", "edit2") == 3

        assert store.find(1) is None
        with pytest.raises(VersionNotFoundError):
            store.reconstruct(1)
        assert store.reconstruct(2) == "v2"
        assert store.current_view() == CurrentView(content="v3", count=2)

    def test_unchanged_seed(self) -> None:
        """Test appending the seed content unchanged."""
        store = VersionStore(capacity=3, seed_content="x")

        store.append("x", "noop")

        assert store.find(1).descriptor.kind is ChangeKind.NO_CHANGE
        assert store.current_view().content == "x"
        assert store.reconstruct(1) == ""

    def test_repeated_content(self) -> None:
        """Test two identical appends in a row."""
        store = VersionStore(capacity=5, seed_content="doc")

        first = store.append("doc", "save")
        second = store.append("doc", "save again")

        assert (first, second) == (1, 2)
        assert [e.kind for e in store.all_logs()] == [
            ChangeKind.NO_CHANGE,
            ChangeKind.NO_CHANGE,
        ]

    def test_long_editing_session(self) -> None:
        """Test a long session against a plain list model."""
        store = VersionStore(capacity=4)
        contents = ["a", "b", "b", "c", "d", "d", "e", "f", "f", "f"]

        for i, content in enumerate(contents, start=1):
            assert store.append(content, f"edit {i}") == i

        retained = [r.version_id for r in store]
        assert retained == [7, 8, 9, 10]
        for version_id in retained:
            assert store.reconstruct(version_id) == contents[version_id - 1]
        assert store.current_view() == CurrentView(content="f", count=4)
