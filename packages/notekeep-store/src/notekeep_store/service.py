"""Note service: save, list, and search agent notes.

The service is the one place where storage failures are turned into results.
Only ``CapacityExceededError`` always reaches the caller:

- ``list_notes``, ``search`` and ``relevant_notes`` log the failure and
  return an empty result.
- ``save`` returns the caller's note unchanged, writing nothing, when the
  existing notes cannot be read, the note cannot be serialized, or the write
  fails. With ``strict_writes=True`` a storage failure raises
  ``StorageUnavailableError`` instead.

A missing or unparseable notes file is not a failure: storage reports it as
an empty collection.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import TYPE_CHECKING

from notekeep_core.errors import (
    CapacityExceededError,
    MalformedNoteError,
    StorageUnavailableError,
)
from notekeep_core.logging import get_logger
from notekeep_core.types import MAX_COLLECTION_BYTES, Note, NoteCollection

from notekeep_store.codec import encoded_size
from notekeep_store.search import rank_by_relevance, search_notes

if TYPE_CHECKING:
    from notekeep_store.protocols import NoteStorage

logger = get_logger("service")


class NoteService:
    """Persistent notes with keyword and relevance search.

    Usage::

        service = NoteService(JSONFileNoteStorage(".notekeep/notes/notes.json"))
        note = await service.save(Note(title="Build", content=("use make",)))
        hits = await service.search("make")
    """

    def __init__(
        self,
        storage: NoteStorage,
        *,
        max_bytes: int = MAX_COLLECTION_BYTES,
        strict_writes: bool = False,
    ) -> None:
        self._storage = storage
        self._max_bytes = max_bytes
        self._strict_writes = strict_writes

    @property
    def storage(self) -> NoteStorage:
        return self._storage

    async def save(self, note: Note) -> Note:
        """Insert or replace ``note`` by id and return the stored note.

        A note without an id gets a fresh uuid. The size budget is checked
        on the collection as it would be after the upsert, before anything
        is written.

        Raises:
            CapacityExceededError: if the collection would exceed ``max_bytes``.
            StorageUnavailableError: if reading or writing the store fails
                and ``strict_writes`` is set.
        """
        try:
            collection = await self._storage.load()
        except StorageUnavailableError as exc:
            if self._strict_writes:
                raise
            # Writing now would replace notes we could not read
            logger.error("Note %r not saved, existing notes unreadable: %s", note.title, exc)
            return note

        stored = replace(
            note, id=note.id or str(uuid.uuid4()), relevance_score=None
        )
        updated = collection.upsert(stored)

        try:
            size = encoded_size(updated)
        except MalformedNoteError as exc:
            logger.error("Note %r not saved: %s", note.title, exc)
            return note

        if size > self._max_bytes:
            logger.info(
                "Rejected note %s: collection would be %d bytes (limit %d)",
                stored.id, size, self._max_bytes,
            )
            raise CapacityExceededError(size, self._max_bytes)

        try:
            await self._storage.write(updated)
        except StorageUnavailableError as exc:
            if self._strict_writes:
                raise
            logger.error("Note %s not persisted: %s", stored.id, exc)
            return note
        except MalformedNoteError as exc:
            logger.error("Note %r not saved: %s", note.title, exc)
            return note

        logger.debug("Saved note %s (%d bytes total)", stored.id, size)
        return stored

    async def list_notes(self) -> NoteCollection:
        """The whole collection; empty at the default version on failure."""
        try:
            return await self._storage.load()
        except Exception:
            logger.warning("Notes unavailable, returning empty collection", exc_info=True)
            return NoteCollection()

    async def search(self, query: str) -> list[Note]:
        """Notes whose text contains every whitespace-separated query term."""
        try:
            collection = await self._storage.load()
            return search_notes(collection.notes, query)
        except Exception:
            logger.warning("Search failed, returning no results", exc_info=True)
            return []

    async def relevant_notes(self, context: str) -> list[Note]:
        """Notes sharing enough vocabulary with ``context``, best first."""
        try:
            collection = await self._storage.load()
            return rank_by_relevance(collection.notes, context)
        except Exception:
            logger.warning(
                "Relevance search failed, returning no results", exc_info=True
            )
            return []
