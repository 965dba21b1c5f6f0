"""Storage strategies for note collections."""
from __future__ import annotations

from notekeep_store.backends.file import JSONFileNoteStorage
from notekeep_store.backends.memory import InProcessNoteStorage

__all__ = [
    "InProcessNoteStorage",
    "JSONFileNoteStorage",
]
