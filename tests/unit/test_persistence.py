"""Unit tests for snapshot persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from verstore import CurrentView, HistoryIntegrityError, SnapshotError, VersionStore
from verstore.persistence import (
    SNAPSHOT_FORMAT,
    load_snapshot,
    save_snapshot,
    snapshot_from_dict,
    snapshot_to_dict,
)


class TestSnapshotFiles:
    """Tests for saving and loading snapshot files."""

    def test_save_and_load(self, small_store: VersionStore, tmp_path: Path) -> None:
        """Test that a loaded snapshot resumes the store exactly."""
        path = save_snapshot(small_store, tmp_path / "history.json")
        restored = load_snapshot(path)

        assert restored.to_dict() == small_store.to_dict()
        assert restored.current_view() == CurrentView(content="v3", count=2)
        assert restored.append("v4", "edit3") == 4

    def test_creates_parent_directories(
        self, small_store: VersionStore, tmp_path: Path
    ) -> None:
        """Test saving into a directory that does not exist yet."""
        path = tmp_path / "nested" / "dir" / "history.json"
        save_snapshot(small_store, path)

        assert path.exists()

    def test_no_temporary_files_left(
        self, small_store: VersionStore, tmp_path: Path
    ) -> None:
        """Test that saving leaves only the snapshot behind."""
        save_snapshot(small_store, tmp_path / "history.json")
        save_snapshot(small_store, tmp_path / "history.json")

        assert [p.name for p in tmp_path.iterdir()] == ["history.json"]

    def test_file_layout(self, small_store: VersionStore, tmp_path: Path) -> None:
        """Test the JSON envelope."""
        path = save_snapshot(small_store, tmp_path / "history.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["format"] == SNAPSHOT_FORMAT
        assert data["version"] == 1
        assert data["store"]["next_id"] == 4

    def test_unicode_content(self, tmp_path: Path) -> None:
        """Test that non-ASCII content survives a round trip."""
        store = VersionStore(capacity=2)
        store.append("Grüße, 世界", "unicode")

        restored = load_snapshot(save_snapshot(store, tmp_path / "h.json"))
        assert restored.reconstruct(1) == "Grüße, 世界"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test loading a snapshot that does not exist."""
        with pytest.raises(SnapshotError, match="not found"):
            load_snapshot(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test loading a file that is not JSON."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotError):
            load_snapshot(path)


class TestSnapshotEnvelope:
    """Tests for validating snapshot envelopes."""

    def test_wrong_format(self) -> None:
        """Test rejecting documents that are not snapshots."""
        with pytest.raises(SnapshotError):
            snapshot_from_dict({"format": "other", "version": 1, "store": {}})
        with pytest.raises(SnapshotError):
            snapshot_from_dict([])  # type: ignore[arg-type]

    def test_unsupported_version(self, small_store: VersionStore) -> None:
        """Test rejecting newer snapshot versions."""
        data = snapshot_to_dict(small_store)
        data["version"] = 99

        with pytest.raises(SnapshotError, match="Unsupported"):
            snapshot_from_dict(data)

    def test_malformed_store(self) -> None:
        """Test rejecting a store payload with missing fields."""
        data = {"format": SNAPSHOT_FORMAT, "version": 1, "store": {}}

        with pytest.raises(SnapshotError, match="Malformed"):
            snapshot_from_dict(data)

    def test_malformed_descriptor(self, small_store: VersionStore) -> None:
        """Test rejecting a record with an unknown descriptor kind."""
        data = snapshot_to_dict(small_store)
        data["store"]["records"][0]["descriptor"]["kind"] = "patched"

        with pytest.raises(SnapshotError):
            snapshot_from_dict(data)

    def test_integrity_errors_propagate(self, small_store: VersionStore) -> None:
        """Test that invariant violations keep their own error type."""
        data = snapshot_to_dict(small_store)
        data["store"]["next_id"] = 1

        with pytest.raises(HistoryIntegrityError):
            snapshot_from_dict(data)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("created_at", 5),
            ("change_log", 42),
        ],
    )
    def test_wrong_record_field_type(
        self, small_store: VersionStore, field: str, value: object
    ) -> None:
        """Test that wrongly typed record fields are reported as malformed."""
        data = snapshot_to_dict(small_store)
        data["store"]["records"][0][field] = value

        with pytest.raises(SnapshotError, match="Malformed"):
            snapshot_from_dict(data)

    def test_wrong_content_type(self, small_store: VersionStore) -> None:
        """Test that non-string descriptor contents are reported as malformed."""
        data = snapshot_to_dict(small_store)
        data["store"]["records"][1]["descriptor"]["after"] = ["v3"]

        with pytest.raises(SnapshotError, match="Malformed"):
            snapshot_from_dict(data)

    def test_wrong_field_type_in_file(
        self, small_store: VersionStore, tmp_path: Path
    ) -> None:
        """Test that a file with a bad timestamp fails at load time."""
        path = save_snapshot(small_store, tmp_path / "history.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        data["store"]["records"][0]["created_at"] = 5
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(SnapshotError):
            load_snapshot(path)
