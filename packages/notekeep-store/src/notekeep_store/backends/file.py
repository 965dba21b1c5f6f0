from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from pathlib import Path

from notekeep_core.errors import MalformedNoteError, StorageUnavailableError
from notekeep_core.logging import get_logger
from notekeep_core.types import NoteCollection

from notekeep_store.codec import decode_collection, encode_collection

logger = get_logger("backends.file")


class JSONFileNoteStorage:
    """Durable storage: one JSON document on disk.

    The file and its parent directories are created on first write. Writes go
    to a temporary sibling that is then renamed over the target, so readers
    never see a half-written document.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @classmethod
    def in_directory(cls, storage_dir: str | Path) -> JSONFileNoteStorage:
        """Store notes at ``<storage_dir>/notes/notes.json``."""
        return cls(Path(storage_dir) / "notes" / "notes.json")

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> NoteCollection:
        return await asyncio.to_thread(self._read)

    async def write(self, collection: NoteCollection) -> None:
        data = encode_collection(collection, indent=2)
        await asyncio.to_thread(self._write, data)

    def _read(self) -> NoteCollection:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return NoteCollection()
        except OSError as exc:
            raise StorageUnavailableError(
                f"Failed to read notes file {self._path}: {exc}"
            ) from exc

        try:
            return decode_collection(raw)
        except MalformedNoteError as exc:
            logger.warning("Ignoring corrupt notes file %s: %s", self._path, exc)
            return NoteCollection()

    def _write(self, data: bytes) -> None:
        parent = self._path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=parent
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, self._path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageUnavailableError(
                f"Failed to write notes file {self._path}: {exc}"
            ) from exc
