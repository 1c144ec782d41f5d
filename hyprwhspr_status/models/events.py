"""Engine lifecycle event models for the pub/sub event feed."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


TOPIC_PREFIX = "engine"


@dataclass
class RecordingStarted:
    """The Engine started capturing audio."""
    timestamp: datetime = field(default_factory=datetime.now)

    topic = f"{TOPIC_PREFIX}.recording_started"


@dataclass
class RecordingStopped:
    """Capture stopped; the Engine is now transcribing."""
    timestamp: datetime = field(default_factory=datetime.now)

    topic = f"{TOPIC_PREFIX}.recording_stopped"


@dataclass
class TranscriptionSucceeded:
    """A transcription completed with text."""
    text: str
    timestamp: datetime = field(default_factory=datetime.now)

    topic = f"{TOPIC_PREFIX}.transcription_succeeded"


@dataclass
class TranscriptionFailed:
    """A recording/transcription cycle failed."""
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    topic = f"{TOPIC_PREFIX}.transcription_failed"


@dataclass
class ShutdownRequested:
    """The daemon is exiting gracefully."""
    timestamp: datetime = field(default_factory=datetime.now)

    topic = f"{TOPIC_PREFIX}.shutdown_requested"


EngineEvent = Union[
    RecordingStarted,
    RecordingStopped,
    TranscriptionSucceeded,
    TranscriptionFailed,
    ShutdownRequested,
]

ENGINE_EVENT_TYPES = (
    RecordingStarted,
    RecordingStopped,
    TranscriptionSucceeded,
    TranscriptionFailed,
    ShutdownRequested,
)

ENGINE_TOPICS = tuple(event_type.topic for event_type in ENGINE_EVENT_TYPES)
