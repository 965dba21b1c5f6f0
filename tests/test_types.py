from __future__ import annotations

from notekeep_core.types import CURRENT_VERSION, Note, NoteCollection


class TestNote:
    def test_defaults(self):
        note = Note(title="t")
        assert note.id == ""
        assert note.content == ()
        assert note.relevance_score is None
        assert note.timestamp > 0
        assert note.last_accessed > 0

    def test_to_dict_uses_wire_keys(self, context_note):
        data = context_note.to_dict()
        assert data == {
            "id": "context-note",
            "title": "Context Test Note",
            "content": ["This note is about context preservation"],
            "tags": ["context", "preservation"],
            "taskIds": ["task1"],
            "timestamp": 1733990765309,
            "lastAccessed": 1733990765309,
        }

    def test_to_dict_omits_relevance_score(self):
        note = Note(id="a", relevance_score=0.5)
        assert "relevanceScore" not in note.to_dict()
        assert "relevance_score" not in note.to_dict()

    def test_from_dict_missing_fields(self):
        note = Note.from_dict({"id": "x", "timestamp": 5})
        assert note.id == "x"
        assert note.title == ""
        assert note.tags == ()
        assert note.last_accessed == 5

    def test_searchable_text(self, context_note):
        text = context_note.searchable_text()
        assert text == (
            "Context Test Note This note is about context preservation "
            "context preservation"
        )


class TestNoteCollection:
    def test_empty(self):
        collection = NoteCollection()
        assert collection.to_dict() == {"notes": [], "version": CURRENT_VERSION}

    def test_upsert_appends(self):
        collection = NoteCollection().upsert(Note(id="a")).upsert(Note(id="b"))
        assert [n.id for n in collection.notes] == ["a", "b"]

    def test_upsert_replaces_in_place(self):
        collection = (
            NoteCollection()
            .upsert(Note(id="a", title="first"))
            .upsert(Note(id="b"))
            .upsert(Note(id="a", title="second"))
        )
        assert [n.id for n in collection.notes] == ["a", "b"]
        assert collection.notes[0].title == "second"

    def test_upsert_leaves_original_untouched(self):
        original = NoteCollection()
        original.upsert(Note(id="a"))
        assert original.notes == ()


class TestNoteFieldNormalization:
    def test_list_fields_become_tuples(self):
        lines = ["first"]
        tags = ["a"]
        note = Note(id="n", content=lines, tags=tags, task_ids=["t1"])
        lines.append("second")
        tags.clear()
        assert note.content == ("first",)
        assert note.tags == ("a",)
        assert note.task_ids == ("t1",)

    def test_string_field_is_one_item(self):
        note = Note(id="n", content="single line", tags="solo")
        assert note.content == ("single line",)
        assert note.tags == ("solo",)

    def test_from_dict_string_content(self):
        note = Note.from_dict({"id": "n", "content": "just one line", "taskIds": None})
        assert note.content == ("just one line",)
        assert note.task_ids == ()
        assert note.to_dict()["content"] == ["just one line"]
