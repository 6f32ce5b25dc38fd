from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, List, Optional

from smart_scribe.core.interfaces import NoteNotFoundError, NoteStorage, Notifier, StorageError, Subscription, TranscriptSource
from smart_scribe.core.models import Note, NoteQuery
from smart_scribe.core.notes import count_words, detect_note_category, generate_note_title
from smart_scribe.core.speech import NO_SPEECH_RECOGNIZED, speech_error_message
from smart_scribe.core.summarizer import summarize


logger = logging.getLogger(__name__)

EMPTY_HINT = "Speak or type to get AI summary"
TOO_SHORT_HINT = "Type more (30+ chars) for AI analysis..."
DEFAULT_MIN_LIVE_CHARS = 30


def live_hint(text: str, min_chars: int = DEFAULT_MIN_LIVE_CHARS) -> Optional[str]:
    if not text:
        return EMPTY_HINT
    if len(text) <= min_chars:
        return TOO_SHORT_HINT
    return None


class NoteService:
    def __init__(
        self,
        storage: NoteStorage,
        notifier: Notifier,
        min_live_chars: int = DEFAULT_MIN_LIVE_CHARS,
    ) -> None:
        self.storage = storage
        self.notifier = notifier
        self.min_live_chars = min_live_chars

    def preview(self, text: str) -> str:
        return live_hint(text, self.min_live_chars) or summarize(text)

    def save(self, content: str, summary: Optional[str] = None) -> Optional[Note]:
        if summary is None and content:
            summary = summarize(content)
        if not content or not summary:
            self.notifier.notify_status("❌ Add content first")
            return None
        title = generate_note_title(content)
        category = detect_note_category(content).value
        try:
            note_id = self.storage.insert_note(title=title, content=content, summary=summary, category=category)
        except (StorageError, OSError) as exc:
            logger.warning("Saving note failed: %s", exc)
            self.notifier.notify_status(f"❌ Error: {exc}")
            return None
        self.notifier.notify_status(f"✅ Saved! ({category})")
        return self.storage.get_note(note_id)

    def update(
        self,
        note_id: int,
        content: Optional[str] = None,
        title: Optional[str] = None,
        category: Optional[str] = None,
        summary: Optional[str] = None,
        resummarize: bool = False,
    ) -> Note:
        if summary is not None and resummarize:
            raise ValueError("Pass either summary or resummarize, not both.")
        note = self.storage.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        if content is not None:
            note = replace(note, content=content, word_count=count_words(content))
        if title is not None:
            note = replace(note, title=title)
        if category is not None:
            note = replace(note, category=category)
        if summary is not None:
            note = replace(note, summary=summary)
        if resummarize:
            note = replace(note, summary=summarize(note.content))
        return self.storage.update_note(note)

    def delete(self, note_id: int) -> None:
        self.storage.delete_note(note_id)

    def process_transcripts(self, source: TranscriptSource) -> List[Note]:
        saved: List[Note] = []
        for item in source.fetch():
            if item.error is not None:
                self.notifier.notify_status(speech_error_message(item.error))
                continue
            text = (item.text or "").strip()
            if not text or text == NO_SPEECH_RECOGNIZED:
                self.notifier.notify_status(NO_SPEECH_RECOGNIZED)
                continue
            summary = summarize(text)
            self.notifier.notify_summary(summary)
            note = self.save(text, summary)
            if note:
                saved.append(note)
        return saved


class LiveAnalyzer:
    def __init__(
        self,
        on_result: Callable[[str], None],
        analyze_fn: Callable[[str], str] = summarize,
        delay: float = 1.0,
        min_chars: int = DEFAULT_MIN_LIVE_CHARS,
        executor: Optional[Executor] = None,
    ) -> None:
        self.on_result = on_result
        self.analyze_fn = analyze_fn
        self.delay = delay
        self.min_chars = min_chars
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="live-analysis")
        self._owns_executor = executor is None
        # Guards the generation counter and delivery, so results reach
        # on_result in generation order.
        self._lock = threading.RLock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def submit(self, text: str) -> Optional[Future]:
        hint = live_hint(text, self.min_chars)
        with self._lock:
            self._generation += 1
            token = self._generation
            if hint is not None:
                self.on_result(hint)
                return None
        return self._executor.submit(self._run, token, text)

    def _run(self, token: int, text: str) -> Optional[str]:
        if not self.is_current(token):
            return None
        if self.delay > 0:
            time.sleep(self.delay)
        if not self.is_current(token):
            logger.debug("Skipping superseded analysis %d", token)
            return None
        summary = self.analyze_fn(text)
        with self._lock:
            current = self.is_current(token)
            # A submit re-entered on this thread bumps the counter under the same lock.
            if not current or token != self._generation:
                logger.debug("Dropping stale analysis %d", token)
                return None
            self.on_result(summary)
        return summary

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)


class NoteFeed:
    def __init__(self, storage: NoteStorage, callback: Callable[[List[Note]], None]) -> None:
        self.storage = storage
        self.callback = callback
        self.query = NoteQuery()
        self._subscription: Optional[Subscription] = None

    def set_query(self, category: Optional[str] = None, search: Optional[str] = None) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
        self.query = NoteQuery(category=category, search=search)
        self._subscription = self.storage.subscribe(self.query, self.callback)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
