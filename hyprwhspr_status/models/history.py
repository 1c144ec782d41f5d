"""Transcription history models (``transcriptions.json``)."""

import json
import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, TypeAdapter

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
MAX_HISTORY_ENTRIES = 20


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment as ``YYYY-MM-DD HH:MM`` in local time.

    Falls back to UTC when the local zone cannot be resolved.
    """
    if moment is None:
        try:
            moment = datetime.now().astimezone()
        except (OSError, ValueError, OverflowError) as e:
            logger.debug(f"Local timezone unavailable, using UTC: {e}")
            moment = datetime.now(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


class TranscriptionEntry(BaseModel):
    """One completed transcription."""
    text: str
    timestamp: str

    @classmethod
    def now(cls, text: str) -> "TranscriptionEntry":
        return cls(text=text, timestamp=format_timestamp())


HistoryList = TypeAdapter(List[TranscriptionEntry])


def parse_history(raw: bytes) -> List[TranscriptionEntry]:
    """Parse a history document; raises ``pydantic.ValidationError`` if corrupt."""
    return HistoryList.validate_json(raw)


def serialize_history(entries: List[TranscriptionEntry]) -> bytes:
    """Serialize entries as a pretty-printed JSON array."""
    payload = [entry.model_dump() for entry in entries]
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")
