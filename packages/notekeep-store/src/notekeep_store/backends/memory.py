from __future__ import annotations

from notekeep_core.types import NoteCollection


class InProcessNoteStorage:
    """Transient storage: the collection lives on this instance only."""

    def __init__(self) -> None:
        self._collection = NoteCollection()

    async def load(self) -> NoteCollection:
        return self._collection

    async def write(self, collection: NoteCollection) -> None:
        self._collection = collection
