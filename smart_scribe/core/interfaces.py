from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from smart_scribe.core.models import Note, NoteQuery, TranscriptItem


class StorageError(Exception):
    pass


class NoteNotFoundError(StorageError):
    def __init__(self, note_id: int) -> None:
        super().__init__(f"Note id {note_id} not found.")
        self.note_id = note_id


class TranscriptSource(ABC):
    @abstractmethod
    def fetch(self) -> List[TranscriptItem]:
        raise NotImplementedError


class Subscription(ABC):
    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def active(self) -> bool:
        raise NotImplementedError


class NoteStorage(ABC):
    @abstractmethod
    def insert_note(self, title: str, content: str, summary: str, category: str = "General") -> int:
        raise NotImplementedError

    @abstractmethod
    def get_note(self, note_id: int) -> Optional[Note]:
        raise NotImplementedError

    @abstractmethod
    def update_note(self, note: Note) -> Note:
        raise NotImplementedError

    @abstractmethod
    def delete_note(self, note_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_notes(self) -> List[Note]:
        raise NotImplementedError

    @abstractmethod
    def notes_by_category(self, category: str) -> List[Note]:
        raise NotImplementedError

    @abstractmethod
    def search_notes(self, query: str) -> List[Note]:
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, query: NoteQuery, callback: Callable[[List[Note]], None]) -> Subscription:
        raise NotImplementedError

    def query(self, query: NoteQuery) -> List[Note]:
        # Search wins over the category filter.
        if query.search and query.search.strip():
            return self.search_notes(query.search)
        if query.category is not None:
            return self.notes_by_category(query.category)
        return self.list_notes()

    def list_categories(self) -> List[str]:
        categories: List[str] = []
        for note in self.list_notes():
            if note.category not in categories:
                categories.append(note.category)
        return categories


class Notifier(ABC):
    @abstractmethod
    def notify_status(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def notify_summary(self, message: str) -> None:
        raise NotImplementedError
