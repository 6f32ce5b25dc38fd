"""Tests for the JSON note storage."""

import json

import pytest

from smart_scribe.adapters.storage_json import JsonNoteStorage
from smart_scribe.core.interfaces import NoteNotFoundError, StorageError
from smart_scribe.core.models import NoteQuery


@pytest.fixture
def storage(tmp_path):
    return JsonNoteStorage(base_dir=str(tmp_path / "data"))


class TestCrud:
    def test_insert_and_get(self, storage):
        note_id = storage.insert_note("Title", "some content here", "summary", category="Ideas")
        assert note_id == 1
        note = storage.get_note(note_id)
        assert note.title == "Title"
        assert note.category == "Ideas"
        assert note.word_count == 3
        assert note.created_at == note.updated_at

    def test_ids_increase(self, storage):
        first = storage.insert_note("a", "a", "a")
        second = storage.insert_note("b", "b", "b")
        storage.delete_note(second)
        third = storage.insert_note("c", "c", "c")
        assert (first, second, third) == (1, 2, 3)

    def test_missing_note(self, storage):
        assert storage.get_note(99) is None

    def test_update_stamps_time(self, storage):
        note = storage.get_note(storage.insert_note("a", "alpha", "s"))
        note.title = "renamed"
        updated = storage.update_note(note)
        assert updated.updated_at >= note.updated_at
        assert storage.get_note(note.id).title == "renamed"

    def test_update_unknown(self, storage):
        note = storage.get_note(storage.insert_note("a", "alpha", "s"))
        storage.delete_note(note.id)
        with pytest.raises(NoteNotFoundError):
            storage.update_note(note)

    def test_delete_unknown(self, storage):
        with pytest.raises(NoteNotFoundError):
            storage.delete_note(5)

    def test_persisted_to_file(self, storage):
        storage.insert_note("a", "alpha", "s")
        reopened = JsonNoteStorage(base_dir=storage.base_dir)
        assert [note.title for note in reopened.list_notes()] == ["a"]

    def test_corrupt_file(self, storage, tmp_path):
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "notes.json").write_text("{nope", encoding="utf-8")
        with pytest.raises(StorageError):
            storage.list_notes()

    def test_unicode_kept(self, storage):
        storage.insert_note("Café", "déjà vu", "📅 Meeting Summary:")
        with open(storage.path, encoding="utf-8") as handle:
            assert "📅" in json.load(handle)["notes"][0]["summary"]


class TestQueries:
    def test_newest_first(self, storage):
        first = storage.insert_note("first", "one", "s")
        storage.insert_note("second", "two", "s")
        assert [n.title for n in storage.list_notes()] == ["second", "first"]
        storage.update_note(storage.get_note(first))
        assert [n.title for n in storage.list_notes()] == ["first", "second"]

    def test_by_category(self, storage):
        storage.insert_note("a", "one", "s", category="Meeting")
        storage.insert_note("b", "two", "s", category="General")
        assert [n.title for n in storage.notes_by_category("Meeting")] == ["a"]

    def test_search_content_and_summary(self, storage):
        storage.insert_note("a", "Budget review", "s")
        storage.insert_note("b", "nothing", "mentions the BUDGET")
        storage.insert_note("c", "other", "other")
        assert sorted(n.title for n in storage.search_notes("budget")) == ["a", "b"]

    def test_search_wins_over_category(self, storage):
        storage.insert_note("a", "apples", "s", category="Shopping")
        storage.insert_note("b", "pears", "s", category="General")
        notes = storage.query(NoteQuery(category="General", search="apples"))
        assert [n.title for n in notes] == ["a"]

    def test_blank_search_falls_back_to_category(self, storage):
        storage.insert_note("a", "apples", "s", category="Shopping")
        storage.insert_note("b", "pears", "s", category="General")
        notes = storage.query(NoteQuery(category="General", search="  "))
        assert [n.title for n in notes] == ["b"]

    def test_list_categories(self, storage):
        storage.insert_note("a", "x", "s", category="Meeting")
        storage.insert_note("b", "y", "s", category="Ideas")
        storage.insert_note("c", "z", "s", category="Meeting")
        assert storage.list_categories() == ["Meeting", "Ideas"]


class TestSubscriptions:
    def test_delivers_now_and_on_write(self, storage):
        seen = []
        storage.subscribe(NoteQuery(), lambda notes: seen.append(len(notes)))
        storage.insert_note("a", "x", "s")
        storage.insert_note("b", "y", "s")
        assert seen == [0, 1, 2]

    def test_cancelled_subscription_is_silent(self, storage):
        seen = []
        subscription = storage.subscribe(NoteQuery(category="Ideas"), seen.append)
        subscription.cancel()
        storage.insert_note("a", "x", "s", category="Ideas")
        assert not subscription.active
        assert seen == [[]]
