"""Environment-based configuration for version histories."""

from __future__ import annotations

import os

from verstore.base import HistoryConfig

DEFAULT_SNAPSHOT_PATH = ".verstore.json"


def get_default_config() -> HistoryConfig:
    """Get history config from environment variables.

    Environment variables:
        VERSTORE_CAPACITY: Maximum retained versions (default: 10)
        VERSTORE_SEED_CONTENT: Content before the first version (default: "")
        VERSTORE_MAX_CONTENT_LENGTH: Longest accepted content (default: 1023)
        VERSTORE_MAX_LOG_LENGTH: Longest accepted change log (default: 255)
        VERSTORE_SNAPSHOT_PATH: Snapshot file used by the CLI
        VERSTORE_LOG_LEVEL: Logging level name (default: WARNING)

    Unparsable numeric values fall back to their defaults.
    """
    defaults = HistoryConfig()

    def get_int(key: str, default: int) -> int:
        try:
            return int(os.environ.get(key, default))
        except ValueError:
            return default

    return HistoryConfig(
        capacity=get_int("VERSTORE_CAPACITY", defaults.capacity),
        seed_content=os.environ.get("VERSTORE_SEED_CONTENT", defaults.seed_content),
        max_content_length=get_int(
            "VERSTORE_MAX_CONTENT_LENGTH", defaults.max_content_length
        ),
        max_log_length=get_int("VERSTORE_MAX_LOG_LENGTH", defaults.max_log_length),
        snapshot_path=os.environ.get("VERSTORE_SNAPSHOT_PATH"),
        log_level=os.environ.get("VERSTORE_LOG_LEVEL", defaults.log_level).upper(),
    )


def resolve_snapshot_path(config: HistoryConfig) -> str:
    """Snapshot path from config, falling back to the working directory."""
    return config.snapshot_path or DEFAULT_SNAPSHOT_PATH
