from __future__ import annotations

from smart_scribe.core.models import Note, StorageCategory
from smart_scribe.core.text import truncate


STORAGE_CATEGORY_KEYWORDS = [
    (StorageCategory.MEETING, ["meeting"]),
    (StorageCategory.LECTURE, ["lecture", "chapter"]),
    (StorageCategory.SHOPPING, ["shopping", "buy"]),
    (StorageCategory.IDEAS, ["idea", "project"]),
]
LONG_FORM_MIN_LENGTH = 200
TITLE_MAX_LENGTH = 40
PREVIEW_MAX_LENGTH = 100


def generate_note_title(content: str) -> str:
    return truncate(content.split(". ")[0], TITLE_MAX_LENGTH)


def detect_note_category(content: str) -> StorageCategory:
    # Independent of classifier.classify; the two labels can disagree.
    lowered = content.lower()
    for category, keywords in STORAGE_CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    if len(content) > LONG_FORM_MIN_LENGTH:
        return StorageCategory.LONG_FORM
    return StorageCategory.GENERAL


def count_words(content: str) -> int:
    return len(content.split(" "))


def summary_preview(summary: str) -> str:
    return truncate(summary, PREVIEW_MAX_LENGTH)


def share_text(note: Note) -> str:
    return f"📝 {note.title}\n\n{note.content}\n\n🤖 AI Summary:\n{note.summary}"
