"""Tabular export of version history."""

from __future__ import annotations

import polars as pl

from verstore.store import VersionStore

HISTORY_SCHEMA = {
    "version_id": pl.UInt64,
    "change_log": pl.Utf8,
    "kind": pl.Utf8,
    "summary": pl.Utf8,
    "created_at": pl.Datetime("us"),
}


def history_frame(store: VersionStore) -> pl.DataFrame:
    """Build a DataFrame with one row per retained version, oldest first.

    Args:
        store: Store to export.

    Returns:
        DataFrame with columns version_id, change_log, kind, summary and
        created_at. Empty stores give an empty frame with the same schema.
    """
    entries = store.all_logs()
    return pl.DataFrame(
        {
            "version_id": [e.version_id for e in entries],
            "change_log": [e.change_log for e in entries],
            "kind": [e.kind.value for e in entries],
            "summary": [e.summary for e in entries],
            "created_at": [e.created_at for e in entries],
        },
        schema=HISTORY_SCHEMA,
    )
