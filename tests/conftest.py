from __future__ import annotations

import pytest
import pytest_asyncio
from notekeep_core import Note


@pytest_asyncio.fixture
async def memory_note_storage():
    from notekeep_store.backends import InProcessNoteStorage
    return InProcessNoteStorage()


@pytest.fixture
def notes_path(tmp_path):
    return tmp_path / "storage" / "notes" / "notes.json"


@pytest_asyncio.fixture
async def file_note_storage(notes_path):
    from notekeep_store.backends import JSONFileNoteStorage
    return JSONFileNoteStorage(notes_path)


@pytest.fixture
def context_note() -> Note:
    return Note(
        id="context-note",
        title="Context Test Note",
        content=("This note is about context preservation",),
        tags=("context", "preservation"),
        task_ids=("task1",),
        timestamp=1733990765309,
        last_accessed=1733990765309,
    )


@pytest.fixture
def unrelated_note() -> Note:
    return Note(
        id="other-note",
        title="Unrelated Note",
        content=("Something completely different",),
        tags=("other",),
        task_ids=("task2",),
        timestamp=1733990765309,
        last_accessed=1733990765309,
    )
