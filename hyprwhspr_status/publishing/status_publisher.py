"""Status publisher: lifecycle state machine serialized to ``status.json``."""

import logging
import threading
from typing import Optional

from ..models.events import (
    EngineEvent,
    RecordingStarted,
    RecordingStopped,
    ShutdownRequested,
    TranscriptionFailed,
    TranscriptionSucceeded,
)
from ..models.status import StatusClass, StatusRecord
from .base import AbstractTransport, STATUS_DOCUMENT

logger = logging.getLogger(__name__)


class StatusPublisher:
    """Tracks the Engine lifecycle and publishes one record per transition.

    Each transition replaces the whole record; nothing is merged with the
    previous file content.
    """

    def __init__(self, transport: AbstractTransport):
        """Initialize status publisher.

        Args:
            transport: Transport the status document is written to
        """
        self.transport = transport
        self.lock = threading.Lock()
        self.status_class = StatusClass.INACTIVE
        self.error_message: Optional[str] = None
        self.running = True
        self.current = StatusRecord.derive(StatusClass.INACTIVE)
        logger.info("StatusPublisher initialized")

    def transition(self, event: EngineEvent) -> StatusRecord:
        """Apply an Engine event to the state machine without writing anything.

        Args:
            event: Engine lifecycle event

        Returns:
            The record derived from the new state
        """
        with self.lock:
            if isinstance(event, RecordingStarted):
                self._set(StatusClass.ACTIVE)
            elif isinstance(event, RecordingStopped):
                self._set(StatusClass.PROCESSING)
            elif isinstance(event, TranscriptionSucceeded):
                self._set(StatusClass.INACTIVE)
            elif isinstance(event, TranscriptionFailed):
                self._set(StatusClass.ERROR, message=event.message)
            elif isinstance(event, ShutdownRequested):
                self._set(StatusClass.INACTIVE, running=False)
            else:
                raise TypeError(f"Unsupported engine event: {event!r}")

            logger.debug(f"{type(event).__name__} -> {self.current.status_class.value}")
            return self.current

    def _set(self, status_class: StatusClass, message: Optional[str] = None,
             running: bool = True) -> None:
        self.status_class = status_class
        self.error_message = message
        self.running = running
        self.current = StatusRecord.derive(status_class, message, running)

    def write(self, record: StatusRecord) -> None:
        """Write a record through the transport; raises ``WriteError`` on failure."""
        self.transport.write(STATUS_DOCUMENT, record.to_bytes())
        logger.debug(f"Published status: {record.status_class.value} ({record.tooltip})")

    def publish(self, event: EngineEvent) -> StatusRecord:
        """Transition on ``event`` and write the resulting record.

        Raises:
            WriteError: if the write failed
        """
        record = self.transition(event)
        self.write(record)
        return record

    def transition_to_ready(self) -> StatusRecord:
        """Reset to the startup state (inactive, "Ready")."""
        with self.lock:
            self._set(StatusClass.INACTIVE)
            return self.current

    def publish_initial(self) -> StatusRecord:
        """Write the startup record."""
        record = self.transition_to_ready()
        self.write(record)
        return record

    def set_recording(self, recording: bool) -> StatusRecord:
        """Shorthand for the recording start/finish transitions."""
        if recording:
            return self.publish(RecordingStarted())
        return self.publish(TranscriptionSucceeded(text=""))
