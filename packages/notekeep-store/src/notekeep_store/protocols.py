from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from notekeep_core.types import NoteCollection


@runtime_checkable
class NoteStorage(Protocol):
    """Holds one versioned note collection.

    ``load`` returns an empty collection when nothing has been stored yet.
    Both methods raise ``StorageUnavailableError`` when the medium fails.
    """

    async def load(self) -> NoteCollection: ...
    async def write(self, collection: NoteCollection) -> None: ...
