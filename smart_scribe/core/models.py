from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Category(str, Enum):
    MEETING = "Meeting"
    EDUCATIONAL = "Educational"
    NARRATIVE = "Narrative"
    TECHNICAL = "Technical"
    GENERAL = "General"


class StorageCategory(str, Enum):
    MEETING = "Meeting"
    LECTURE = "Lecture"
    SHOPPING = "Shopping"
    IDEAS = "Ideas"
    LONG_FORM = "Long Form"
    GENERAL = "General"


@dataclass(frozen=True)
class Segments:
    sentences: List[str]
    words: List[str]

    @property
    def too_short(self) -> bool:
        return len(self.sentences) <= 1 or len(self.words) < 10


@dataclass(frozen=True)
class MeetingExtraction:
    topic: str
    decisions: List[str]
    actions: List[str]
    participants: List[str]


@dataclass(frozen=True)
class EducationalExtraction:
    topic: str
    keywords: List[str]
    main_points: List[str]


@dataclass(frozen=True)
class NarrativeExtraction:
    keywords: List[str]
    key_events: List[str]


@dataclass(frozen=True)
class TechnicalExtraction:
    topic: str
    keywords: List[str]
    definitions: List[str]


@dataclass(frozen=True)
class GeneralExtraction:
    main_idea: str
    key_points: List[str]


@dataclass(frozen=True)
class AnalysisResult:
    category: Optional[Category]
    summary: str

    @property
    def short_circuited(self) -> bool:
        return self.category is None


@dataclass
class Note:
    id: int
    title: str
    content: str
    summary: str
    created_at: datetime
    updated_at: datetime
    category: str = StorageCategory.GENERAL.value
    word_count: int = 0


@dataclass(frozen=True)
class NoteQuery:
    category: Optional[str] = None
    search: Optional[str] = None


@dataclass
class TranscriptItem:
    item_id: str
    created_at: datetime
    text: Optional[str] = None
    error: Optional[str] = None
    source: str = "queue"
    raw: dict = field(default_factory=dict)
