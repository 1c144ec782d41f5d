"""Bounded, newest-first transcription history persisted as JSON."""

import logging
import threading
from typing import List

from pydantic import ValidationError

from ..models.history import (
    MAX_HISTORY_ENTRIES,
    TranscriptionEntry,
    parse_history,
    serialize_history,
)
from ..publishing.base import AbstractTransport, HISTORY_DOCUMENT

logger = logging.getLogger(__name__)


class HistoryStore:
    """Appends transcriptions to the history document.

    Every append re-reads the document instead of caching it, so the file
    stays the ground truth. A corrupt or missing document counts as empty
    and is healed by the next write.
    """

    def __init__(self, transport: AbstractTransport, max_entries: int = MAX_HISTORY_ENTRIES):
        """Initialize history store.

        Args:
            transport: Transport the history document is read from and written to
            max_entries: Maximum number of entries kept
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.transport = transport
        self.max_entries = max_entries
        self.lock = threading.Lock()
        logger.info(f"HistoryStore initialized (max_entries={max_entries})")

    def entries(self) -> List[TranscriptionEntry]:
        """Current history, newest first; empty if missing or corrupt."""
        try:
            raw = self.transport.read(HISTORY_DOCUMENT)
        except OSError as e:
            logger.warning(f"Cannot read history document, starting from empty: {e}")
            return []
        if raw is None:
            return []
        try:
            return parse_history(raw)
        except ValidationError as e:
            logger.warning(f"History document is corrupt, starting from empty: {e.error_count()} errors")
            return []

    def append(self, entry: TranscriptionEntry) -> List[TranscriptionEntry]:
        """Prepend ``entry``, truncate to ``max_entries`` and rewrite the document.

        Returns:
            The list that was written

        Raises:
            WriteError: if the write failed
        """
        with self.lock:
            entries = self.entries()
            entries.insert(0, entry)
            del entries[self.max_entries:]
            self.transport.write(HISTORY_DOCUMENT, serialize_history(entries))

        logger.debug(f"Saved transcription to history ({len(entries)} entries)")
        return entries

    def record(self, text: str) -> TranscriptionEntry:
        """Append a transcription stamped with the current local time."""
        entry = TranscriptionEntry.now(text)
        self.append(entry)
        return entry

    def clear(self) -> int:
        """Replace the history with an empty list. Returns the count removed."""
        with self.lock:
            removed = len(self.entries())
            self.transport.write(HISTORY_DOCUMENT, serialize_history([]))
        logger.info(f"Cleared {removed} history entries")
        return removed
