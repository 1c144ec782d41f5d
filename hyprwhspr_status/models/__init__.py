"""Data models for the hyprwhspr status publisher."""

from .status import StatusClass, StatusRecord, tooltip_for
from .history import (
    MAX_HISTORY_ENTRIES,
    TranscriptionEntry,
    format_timestamp,
    parse_history,
    serialize_history,
)
from .events import (
    EngineEvent,
    ENGINE_TOPICS,
    RecordingStarted,
    RecordingStopped,
    TranscriptionSucceeded,
    TranscriptionFailed,
    ShutdownRequested,
)

__all__ = [
    "StatusClass",
    "StatusRecord",
    "tooltip_for",
    # History
    "MAX_HISTORY_ENTRIES",
    "TranscriptionEntry",
    "format_timestamp",
    "parse_history",
    "serialize_history",
    # Engine events
    "EngineEvent",
    "ENGINE_TOPICS",
    "RecordingStarted",
    "RecordingStopped",
    "TranscriptionSucceeded",
    "TranscriptionFailed",
    "ShutdownRequested",
]
