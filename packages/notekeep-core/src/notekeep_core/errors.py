from __future__ import annotations


class NotekeepError(Exception):
    """Base exception for all notekeep errors."""


# ── Store Errors ─────────────────────────────────────────────────────

class StoreError(NotekeepError):
    """Base for note store errors."""


class CapacityExceededError(StoreError):
    """Collection would grow past its serialized byte budget.

    The caller has to shrink or split the note before saving it again.
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Notes collection exceeds size limit ({size} > {limit} bytes)"
        )
        self.size = size
        self.limit = limit


class StorageUnavailableError(StoreError):
    """Backing medium cannot be created, read, or written."""


class MalformedNoteError(StoreError):
    """A note has fields that cannot be serialized."""


# ── Config Errors ────────────────────────────────────────────────────

class ConfigError(NotekeepError):
    """Invalid or missing configuration."""
