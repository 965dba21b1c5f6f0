"""Notekeep Store: persistence and search for agent notes.

Example usage::

    from notekeep_core import Note
    from notekeep_store import JSONFileNoteStorage, NoteService

    service = NoteService(JSONFileNoteStorage.in_directory("/tmp/agent"))
    await service.save(Note(title="Deploy", content=("staging uses port 8080",)))

    for note in await service.relevant_notes("which port does staging use"):
        print(f"[{note.relevance_score:.2f}] {note.title}")
"""
from __future__ import annotations

from notekeep_store.backends import InProcessNoteStorage, JSONFileNoteStorage
from notekeep_store.builder import NoteServiceBuilder
from notekeep_store.protocols import NoteStorage
from notekeep_store.service import NoteService

__all__ = [
    "InProcessNoteStorage",
    "JSONFileNoteStorage",
    "NoteService",
    "NoteServiceBuilder",
    "NoteStorage",
]
