"""Tests for storage-side note heuristics and the speech error mapping."""

from datetime import datetime

import pytest

from smart_scribe.core.classifier import classify
from smart_scribe.core.models import Category, Note, StorageCategory
from smart_scribe.core.notes import count_words, detect_note_category, generate_note_title, share_text, summary_preview
from smart_scribe.core.speech import (
    NO_SPEECH_RECOGNIZED,
    SpeechError,
    best_transcript,
    parse_speech_error,
    speech_error_message,
)


class TestTitle:
    def test_first_sentence(self):
        assert generate_note_title("Groceries for the week. Milk, eggs.") == "Groceries for the week"

    def test_truncated_to_forty(self):
        content = "x" * 45 + ". more"
        assert generate_note_title(content) == "x" * 40 + "..."


class TestStorageCategory:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("Notes from the Meeting with finance", StorageCategory.MEETING),
            ("meeting about the lecture", StorageCategory.MEETING),
            ("Buy books for the lecture", StorageCategory.LECTURE),
            ("Chapter three summary", StorageCategory.LECTURE),
            ("shopping list for saturday", StorageCategory.SHOPPING),
            ("need to buy paint", StorageCategory.SHOPPING),
            ("An idea for the garden", StorageCategory.IDEAS),
            ("side project notes", StorageCategory.IDEAS),
            ("z" * 201, StorageCategory.LONG_FORM),
            ("just a thought", StorageCategory.GENERAL),
        ],
    )
    def test_detect(self, content, expected):
        assert detect_note_category(content) is expected

    def test_differs_from_summary_category(self):
        text = "The algorithm runs fast and the system is stable today."
        assert classify(text) is Category.TECHNICAL
        assert detect_note_category(text) is StorageCategory.GENERAL


def test_count_words_keeps_empty_pieces():
    assert count_words("a  b") == 3
    assert count_words("one two three") == 3


class TestSharing:
    def test_preview_truncates_long_summary(self):
        assert summary_preview("s" * 150) == "s" * 100 + "..."
        assert summary_preview("short summary") == "short summary"

    def test_share_text_layout(self):
        stamp = datetime(2024, 5, 1, 9, 30)
        note = Note(
            id=3,
            title="Weekly sync",
            content="Discussed the roadmap.",
            summary="Roadmap agreed.",
            created_at=stamp,
            updated_at=stamp,
        )
        assert share_text(note) == "📝 Weekly sync\n\nDiscussed the roadmap.\n\n🤖 AI Summary:\nRoadmap agreed."


class TestSpeech:
    def test_named_errors_have_messages(self):
        for error in SpeechError:
            if error is SpeechError.UNKNOWN:
                continue
            assert not speech_error_message(error).startswith("Unknown error")

    def test_message_from_code_string(self):
        assert speech_error_message("network") == "Network error. Check internet connection."
        assert speech_error_message("NO_MATCH") == "No speech detected. Please try again."

    def test_unknown(self):
        assert parse_speech_error("flux") is SpeechError.UNKNOWN
        assert speech_error_message("flux") == "Unknown error: flux"
        assert speech_error_message(SpeechError.UNKNOWN, code="42") == "Unknown error: 42"

    def test_best_transcript(self):
        assert best_transcript(["first", "second"]) == "first"
        assert best_transcript([]) == NO_SPEECH_RECOGNIZED
        assert best_transcript(None) == NO_SPEECH_RECOGNIZED
