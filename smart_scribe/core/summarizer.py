from __future__ import annotations

from typing import Callable, Dict, List

from smart_scribe.core.classifier import classify
from smart_scribe.core.models import (
    AnalysisResult,
    Category,
    EducationalExtraction,
    GeneralExtraction,
    MeetingExtraction,
    NarrativeExtraction,
    TechnicalExtraction,
)
from smart_scribe.core.text import (
    contains_any,
    extract_keywords,
    extract_main_topic,
    extract_participants,
    segment,
    split_sentences,
    truncate,
)


SHORT_TEXT_MESSAGE = "Content too short for meaningful summary. Please provide more text."
SHORT_TEXT_GLYPH = "📝"

DECISION_MARKERS = ["decide", "agree", "conclude"]
ACTION_MARKERS = ["will", "need to", "action"]
EVENT_VERBS = ["went", "found", "decided", "created", "began"]

BULLET = "• "
SUB_ITEM = "\n   - "


def _matching(sentences: List[str], markers: List[str], min_length: int = 0) -> List[str]:
    return [s for s in sentences if len(s) > min_length and contains_any(s, markers)]


def extract_meeting(text: str) -> MeetingExtraction:
    sentences = split_sentences(text)
    return MeetingExtraction(
        topic=extract_main_topic(text),
        decisions=_matching(sentences, DECISION_MARKERS)[:2],
        actions=_matching(sentences, ACTION_MARKERS)[:3],
        participants=extract_participants(text)[:3],
    )


def extract_educational(text: str) -> EducationalExtraction:
    keywords = extract_keywords(text, 5)
    return EducationalExtraction(
        topic=extract_main_topic(text),
        keywords=keywords,
        main_points=_matching(text.split(". "), keywords, min_length=20)[:3],
    )


def extract_narrative(text: str) -> NarrativeExtraction:
    return NarrativeExtraction(
        keywords=extract_keywords(text, 3),
        key_events=_matching(split_sentences(text), EVENT_VERBS, min_length=15)[:3],
    )


def extract_technical(text: str) -> TechnicalExtraction:
    keywords = extract_keywords(text, 5)
    return TechnicalExtraction(
        topic=extract_main_topic(text),
        keywords=keywords,
        definitions=_matching(text.split(". "), keywords, min_length=15)[:3],
    )


def extract_general(text: str) -> GeneralExtraction:
    sentences = split_sentences(text)
    longest = sorted((s for s in sentences if len(s) > 15), key=len, reverse=True)[:3]
    if len(sentences) >= 2:
        main_idea = sentences[1]
    elif sentences:
        main_idea = sentences[0]
    else:
        main_idea = ""
    return GeneralExtraction(
        main_idea=truncate(main_idea, 80),
        key_points=[truncate(s, 100) for s in longest],
    )


def render_meeting(result: MeetingExtraction) -> str:
    decisions = "; ".join(result.decisions) if result.decisions else "None specified"
    actions = "; ".join(result.actions) if result.actions else "No specific actions"
    return "\n".join([
        "📅 Meeting Summary:",
        f"{BULLET}Topic: {result.topic}",
        f"{BULLET}Key decisions: {decisions}",
        f"{BULLET}Action items: {actions}",
        f"{BULLET}Participants mentioned: {', '.join(result.participants)}",
    ])


def render_educational(result: EducationalExtraction) -> str:
    return "\n".join([
        "📚 Educational Summary:",
        f"{BULLET}Main topic: {result.topic}",
        f"{BULLET}Key concepts: {', '.join(result.keywords)}",
        f"{BULLET}Important points:{SUB_ITEM}{SUB_ITEM.join(result.main_points)}",
    ])


def render_narrative(result: NarrativeExtraction) -> str:
    events = SUB_ITEM.join(result.key_events) if result.key_events else "No specific events found."
    return "\n".join([
        "📖 Narrative Summary:",
        f"{BULLET}Main Theme/Characters: {', '.join(result.keywords)}",
        f"{BULLET}Key Events:{SUB_ITEM}{events}",
    ])


def render_technical(result: TechnicalExtraction) -> str:
    points = SUB_ITEM.join(result.definitions) if result.definitions else "No specific points found."
    return "\n".join([
        "⚙️ Technical Summary:",
        f"{BULLET}Core Topic: {result.topic}",
        f"{BULLET}Key Terms: {', '.join(result.keywords)}",
        f"{BULLET}Main Points:{SUB_ITEM}{points}",
    ])


def render_general(result: GeneralExtraction) -> str:
    return "\n".join([
        "🤖 AI Analysis:",
        f"{BULLET}Main idea: {result.main_idea}",
        f"{BULLET}Key points:{SUB_ITEM}{SUB_ITEM.join(result.key_points)}",
    ])


STRATEGIES: Dict[Category, tuple[Callable, Callable]] = {
    Category.MEETING: (extract_meeting, render_meeting),
    Category.EDUCATIONAL: (extract_educational, render_educational),
    Category.NARRATIVE: (extract_narrative, render_narrative),
    Category.TECHNICAL: (extract_technical, render_technical),
    Category.GENERAL: (extract_general, render_general),
}


def short_text_summary() -> str:
    return f"{SHORT_TEXT_GLYPH} {SHORT_TEXT_MESSAGE}"


def analyze(text: str) -> AnalysisResult:
    if segment(text).too_short:
        return AnalysisResult(category=None, summary=short_text_summary())
    category = classify(text)
    extract, render = STRATEGIES[category]
    return AnalysisResult(category=category, summary=render(extract(text)))


def summarize(text: str) -> str:
    return analyze(text).summary
