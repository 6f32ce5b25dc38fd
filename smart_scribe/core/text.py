from __future__ import annotations

import re
from typing import Dict, List

from smart_scribe.core.models import Segments


SENTENCE_DELIMITERS = (". ", "! ", "? ")
STOP_WORDS = {"the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "is", "are", "was", "were"}
ELLIPSIS = "..."

_SENTENCE_SPLIT = re.compile("|".join(re.escape(d) for d in SENTENCE_DELIMITERS))


def split_sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def split_words(text: str) -> List[str]:
    return [w for w in text.split(" ") if w.strip()]


def segment(text: str) -> Segments:
    return Segments(sentences=split_sentences(text), words=split_words(text))


def truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def contains_any(text: str, needles) -> bool:
    lowered = text.lower()
    return any(needle.lower() in lowered for needle in needles)


def extract_main_topic(text: str) -> str:
    # Only ". " counts here, not the full delimiter set.
    first = text.split(". ")[0]
    return truncate(first, 60)


def extract_keywords(text: str, count: int) -> List[str]:
    # Ties keep first-seen order.
    if count <= 0:
        return []
    frequency: Dict[str, int] = {}
    for word in text.split(" "):
        if len(word) <= 4 or word in STOP_WORDS or not word[0].isupper():
            continue
        key = word.lower()
        frequency[key] = frequency.get(key, 0) + 1
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:count]]


def extract_participants(text: str) -> List[str]:
    words = text.split(" ")
    seen: List[str] = []
    for index, word in enumerate(words):
        if index == 0 or len(word) <= 2 or not word[0].isupper():
            continue
        if words[index - 1].endswith((".", "!", "?")):
            continue
        if word not in seen:
            seen.append(word)
    return seen
