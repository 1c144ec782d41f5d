"""Engine event publisher for the pub/sub event feed."""

import logging
from pubsub import pub

from ..models.events import (
    EngineEvent,
    RecordingStarted,
    RecordingStopped,
    ShutdownRequested,
    TranscriptionFailed,
    TranscriptionSucceeded,
)

logger = logging.getLogger(__name__)


class EngineEventPublisher:
    """Publishes Engine lifecycle events using pubsub.pub, one topic per event type."""

    def publish_event(self, event: EngineEvent) -> None:
        """Publish an Engine event on its topic.

        Args:
            event: Engine lifecycle event
        """
        logger.debug(f"Publishing {event.topic}")
        pub.sendMessage(event.topic, event=event)

    def recording_started(self) -> None:
        self.publish_event(RecordingStarted())

    def recording_stopped(self) -> None:
        self.publish_event(RecordingStopped())

    def transcription_succeeded(self, text: str) -> None:
        self.publish_event(TranscriptionSucceeded(text=text))

    def transcription_failed(self, message: str) -> None:
        self.publish_event(TranscriptionFailed(message=message))

    def shutdown_requested(self) -> None:
        self.publish_event(ShutdownRequested())
