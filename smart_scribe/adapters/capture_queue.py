from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from smart_scribe.core.interfaces import TranscriptSource
from smart_scribe.core.models import TranscriptItem


logger = logging.getLogger(__name__)


class QueueTranscriptSource(TranscriptSource):
    def __init__(self, queue_path: str = "data/transcript_queue.json") -> None:
        self.queue_path = queue_path

    def enqueue(
        self,
        text: Optional[str] = None,
        error: Optional[str] = None,
        source: str = "cli",
        created_at: Optional[datetime] = None,
    ) -> str:
        if (text is None) == (error is None):
            raise ValueError("Provide exactly one of text or error.")
        created_at = created_at or datetime.now(timezone.utc)
        payload = {
            "id": str(uuid4()),
            "source": source,
            "created_at": created_at.isoformat(),
        }
        if text is not None:
            payload["text"] = text
        else:
            payload["error"] = error
        items = self._read_queue()
        items.append(payload)
        self._write_queue(items)
        logger.debug("Queued transcript %s from %s", payload["id"], source)
        return payload["id"]

    def fetch(self) -> List[TranscriptItem]:
        items = self._read_queue()
        self._write_queue([])
        transcripts = []
        for item in items:
            transcripts.append(
                TranscriptItem(
                    item_id=item["id"],
                    text=item.get("text"),
                    error=item.get("error"),
                    source=item.get("source", "queue"),
                    created_at=datetime.fromisoformat(item["created_at"]),
                    raw=item,
                )
            )
        logger.info("Fetched %d queued transcripts", len(transcripts))
        return transcripts

    def _read_queue(self) -> List[dict]:
        if not os.path.exists(self.queue_path):
            return []
        with open(self.queue_path, "r", encoding="utf-8") as handle:
            return json.load(handle)

    def _write_queue(self, items: List[dict]) -> None:
        dir_name = os.path.dirname(self.queue_path)
        if dir_name:
            os.makedirs(dir_name, exist_ok=True)
        with open(self.queue_path, "w", encoding="utf-8") as handle:
            json.dump(items, handle, indent=2, ensure_ascii=False)
