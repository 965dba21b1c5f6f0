"""JSON encoding of note collections.

The compact encoding (no indent) is the canonical form the size budget is
measured against; files are written with ``indent=2`` for readability.
"""
from __future__ import annotations

import json

from notekeep_core.errors import MalformedNoteError
from notekeep_core.logging import get_logger
from notekeep_core.types import CURRENT_VERSION, Note, NoteCollection

logger = get_logger("codec")


def encode_collection(
    collection: NoteCollection, *, indent: int | None = None
) -> bytes:
    """Serialize a collection to UTF-8 JSON bytes.

    Raises:
        MalformedNoteError: if a note holds values JSON cannot represent.
    """
    separators = (",", ":") if indent is None else None
    try:
        text = json.dumps(
            collection.to_dict(),
            indent=indent,
            separators=separators,
            ensure_ascii=False,
        )
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise MalformedNoteError(f"Cannot serialize notes: {exc}") from exc


def encoded_size(collection: NoteCollection) -> int:
    """Size in bytes of the canonical encoding."""
    return len(encode_collection(collection))


def decode_collection(raw: bytes | str) -> NoteCollection:
    """Parse a persisted notes document.

    Entries that are not JSON objects or fail to convert to a Note are
    dropped and logged; the rest are kept. A missing or unrecognized version
    is replaced by ``CURRENT_VERSION``.

    Raises:
        MalformedNoteError: if the document is not a JSON object.
    """
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise MalformedNoteError(f"Unparseable notes document: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedNoteError(
            f"Notes document must be an object, got {type(data).__name__}"
        )

    raw_notes = data.get("notes") or []
    if not isinstance(raw_notes, list):
        raw_notes = []

    notes: list[Note] = []
    for index, item in enumerate(raw_notes):
        if not isinstance(item, dict):
            logger.warning("Skipping note entry %d: not an object", index)
            continue
        try:
            notes.append(Note.from_dict(item))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping note entry %d (%r): %s", index, item.get("id"), exc)

    version = data.get("version")
    if version != CURRENT_VERSION:
        logger.debug(
            "Notes version %r not recognized, using %d", version, CURRENT_VERSION
        )

    return NoteCollection(notes=tuple(notes), version=CURRENT_VERSION)
