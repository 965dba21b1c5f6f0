"""Notekeep Core: shared types, config, errors, and logging."""
from __future__ import annotations

from notekeep_core._version import __version__
from notekeep_core.config import LoggingConfig, NotekeepConfig, StoreConfig
from notekeep_core.errors import (
    CapacityExceededError,
    ConfigError,
    MalformedNoteError,
    NotekeepError,
    StorageUnavailableError,
    StoreError,
)
from notekeep_core.logging import get_logger, setup_logging
from notekeep_core.types import (
    CURRENT_VERSION,
    MAX_COLLECTION_BYTES,
    Note,
    NoteCollection,
    now_ms,
)

__all__ = [
    # Types
    "CURRENT_VERSION",
    # Errors
    "CapacityExceededError",
    "ConfigError",
    # Config
    "LoggingConfig",
    "MAX_COLLECTION_BYTES",
    "MalformedNoteError",
    "Note",
    "NoteCollection",
    "NotekeepConfig",
    "NotekeepError",
    "StorageUnavailableError",
    "StoreConfig",
    "StoreError",
    # Version
    "__version__",
    # Logging
    "get_logger",
    "now_ms",
    "setup_logging",
]
