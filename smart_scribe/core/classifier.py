from __future__ import annotations

from typing import Callable, List, Tuple

from smart_scribe.core.models import Category
from smart_scribe.core.text import contains_any


CATEGORY_KEYWORDS = {
    Category.MEETING: ["meeting", "discuss", "agenda", "minutes", "present", "team", "project", "decision"],
    Category.EDUCATIONAL: ["chapter", "lesson", "learn", "study", "explain", "concept", "theory", "example"],
    Category.NARRATIVE: ["story", "narrative", "told", "said", "explained", "described", "event", "experience"],
    Category.TECHNICAL: ["code", "program", "function", "method", "algorithm", "system", "technical", "implementation"],
}

MEETING_MIN_LENGTH = 50
EDUCATIONAL_MIN_LENGTH = 200


def is_meeting(text: str) -> bool:
    # Keywords alone are not enough; the text must also be long enough.
    return contains_any(text, CATEGORY_KEYWORDS[Category.MEETING]) and len(text) > MEETING_MIN_LENGTH


def is_educational(text: str) -> bool:
    # Length alone is enough.
    return contains_any(text, CATEGORY_KEYWORDS[Category.EDUCATIONAL]) or len(text) > EDUCATIONAL_MIN_LENGTH


def is_narrative(text: str) -> bool:
    return contains_any(text, CATEGORY_KEYWORDS[Category.NARRATIVE])


def is_technical(text: str) -> bool:
    return contains_any(text, CATEGORY_KEYWORDS[Category.TECHNICAL])


PRIORITY: List[Tuple[Category, Callable[[str], bool]]] = [
    (Category.MEETING, is_meeting),
    (Category.EDUCATIONAL, is_educational),
    (Category.NARRATIVE, is_narrative),
    (Category.TECHNICAL, is_technical),
]


def classify(text: str) -> Category:
    for category, predicate in PRIORITY:
        if predicate(text):
            return category
    return Category.GENERAL
