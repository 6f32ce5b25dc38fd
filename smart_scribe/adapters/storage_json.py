from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from smart_scribe.core.interfaces import NoteNotFoundError, NoteStorage, StorageError, Subscription
from smart_scribe.core.models import Note, NoteQuery
from smart_scribe.core.notes import count_words


logger = logging.getLogger(__name__)

NotesCallback = Callable[[List[Note]], None]


class JsonSubscription(Subscription):
    def __init__(self, storage: "JsonNoteStorage", query: NoteQuery, callback: NotesCallback) -> None:
        self.storage = storage
        self.query = query
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False
        self.storage._drop_subscription(self)

    def deliver(self) -> None:
        if self._active:
            self.callback(self.storage.query(self.query))


class JsonNoteStorage(NoteStorage):
    def __init__(self, base_dir: str = "data", filename: str = "notes.json") -> None:
        self.base_dir = base_dir
        self.filename = filename
        self._lock = threading.RLock()
        self._subscriptions: List[JsonSubscription] = []

    @property
    def path(self) -> str:
        return os.path.join(self.base_dir, self.filename)

    def insert_note(self, title: str, content: str, summary: str, category: str = "General") -> int:
        now = datetime.now(timezone.utc)
        with self._lock:
            table = self._read_table()
            note_id = table["next_id"]
            table["next_id"] = note_id + 1
            table["notes"].append(
                _to_payload(
                    Note(
                        id=note_id,
                        title=title,
                        content=content,
                        summary=summary,
                        created_at=now,
                        updated_at=now,
                        category=category,
                        word_count=count_words(content),
                    )
                )
            )
            self._write_table(table)
        logger.debug("Inserted note %s (%s)", note_id, category)
        self._publish()
        return note_id

    def get_note(self, note_id: int) -> Optional[Note]:
        for item in self._read_table()["notes"]:
            if item["id"] == note_id:
                return _from_payload(item)
        return None

    def update_note(self, note: Note) -> Note:
        updated = replace(note, updated_at=datetime.now(timezone.utc))
        with self._lock:
            table = self._read_table()
            for index, item in enumerate(table["notes"]):
                if item["id"] == note.id:
                    table["notes"][index] = _to_payload(updated)
                    self._write_table(table)
                    break
            else:
                raise NoteNotFoundError(note.id)
        logger.debug("Updated note %s", note.id)
        self._publish()
        return updated

    def delete_note(self, note_id: int) -> None:
        with self._lock:
            table = self._read_table()
            remaining = [item for item in table["notes"] if item["id"] != note_id]
            if len(remaining) == len(table["notes"]):
                raise NoteNotFoundError(note_id)
            table["notes"] = remaining
            self._write_table(table)
        logger.debug("Deleted note %s", note_id)
        self._publish()

    def list_notes(self) -> List[Note]:
        return _newest_first(_from_payload(item) for item in self._read_table()["notes"])

    def notes_by_category(self, category: str) -> List[Note]:
        return [note for note in self.list_notes() if note.category == category]

    def search_notes(self, query: str) -> List[Note]:
        needle = query.lower()
        return [
            note
            for note in self.list_notes()
            if needle in note.content.lower() or needle in note.summary.lower()
        ]

    def subscribe(self, query: NoteQuery, callback: NotesCallback) -> Subscription:
        subscription = JsonSubscription(self, query, callback)
        with self._lock:
            self._subscriptions.append(subscription)
        subscription.deliver()
        return subscription

    def _drop_subscription(self, subscription: JsonSubscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def _publish(self) -> None:
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription.deliver()

    def _read_table(self) -> dict:
        if not os.path.exists(self.path):
            return {"next_id": 1, "notes": []}
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                table = json.load(handle)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt notes file {self.path}: {exc}") from exc
        table.setdefault("notes", [])
        table.setdefault("next_id", max((item["id"] for item in table["notes"]), default=0) + 1)
        return table

    def _write_table(self, table: dict) -> None:
        os.makedirs(self.base_dir, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(table, handle, indent=2, ensure_ascii=False)


def _newest_first(notes) -> List[Note]:
    return sorted(notes, key=lambda n: (n.updated_at, n.id), reverse=True)


def _to_payload(note: Note) -> dict:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "summary": note.summary,
        "category": note.category,
        "word_count": note.word_count,
        "created_at": note.created_at.isoformat(),
        "updated_at": note.updated_at.isoformat(),
    }


def _from_payload(item: dict) -> Note:
    return Note(
        id=item["id"],
        title=item.get("title", ""),
        content=item.get("content", ""),
        summary=item.get("summary", ""),
        category=item.get("category", "General"),
        word_count=item.get("word_count", 0),
        created_at=datetime.fromisoformat(item["created_at"]),
        updated_at=datetime.fromisoformat(item["updated_at"]),
    )
