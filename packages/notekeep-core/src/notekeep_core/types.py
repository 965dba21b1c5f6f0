"""Note data types.

Notes are small, titled, tagged pieces of text an agent writes down while
working on a task, so it can find them again in later tasks and sessions.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

CURRENT_VERSION = 1
MAX_COLLECTION_BYTES = 1024 * 1024


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _as_lines(value: Any) -> tuple[str, ...]:
    """Normalize a sequence field to a tuple; a lone string is one item."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True, slots=True)
class Note:
    """A single note created by an agent.

    Attributes:
        id: Unique identifier; empty means "assign one on save"
        title: Human-readable title
        content: Content lines/paragraphs, in order
        tags: Tags used for searching
        task_ids: Tasks this note is associated with
        timestamp: Creation time, ms since epoch
        last_accessed: Last access time, ms since epoch
        relevance_score: Set only on results of a relevance search, never persisted
    """

    id: str = ""
    title: str = ""
    content: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    task_ids: tuple[str, ...] = ()
    timestamp: int = field(default_factory=now_ms)
    last_accessed: int = field(default_factory=now_ms)
    relevance_score: float | None = None

    def __post_init__(self) -> None:
        # Own copies, so callers cannot mutate stored notes through their lists
        object.__setattr__(self, "content", _as_lines(self.content))
        object.__setattr__(self, "tags", _as_lines(self.tags))
        object.__setattr__(self, "task_ids", _as_lines(self.task_ids))

    def searchable_text(self) -> str:
        """Title, content lines and tags joined by spaces."""
        return " ".join([self.title, *self.content, *self.tags])

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "content": list(self.content),
            "tags": list(self.tags),
            "taskIds": list(self.task_ids),
            "timestamp": self.timestamp,
            "lastAccessed": self.last_accessed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Note:
        """Create a Note from its persisted JSON shape."""
        timestamp = data.get("timestamp", now_ms())
        return cls(
            id=data.get("id") or "",
            title=data.get("title", ""),
            content=data.get("content"),
            tags=data.get("tags"),
            task_ids=data.get("taskIds"),
            timestamp=timestamp,
            last_accessed=data.get("lastAccessed", timestamp),
        )


@dataclass(frozen=True, slots=True)
class NoteCollection:
    """All notes held by one store, in insertion order, plus a schema version."""

    notes: tuple[Note, ...] = ()
    version: int = CURRENT_VERSION

    def upsert(self, note: Note) -> NoteCollection:
        """Return a new collection with ``note`` replacing its namesake or appended."""
        notes = list(self.notes)
        for i, existing in enumerate(notes):
            if existing.id == note.id:
                notes[i] = note
                break
        else:
            notes.append(note)
        return NoteCollection(notes=tuple(notes), version=self.version)

    def to_dict(self) -> dict[str, Any]:
        return {
            "notes": [n.to_dict() for n in self.notes],
            "version": self.version,
        }
