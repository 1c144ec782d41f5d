"""Publication service that turns Engine events into status and history writes."""

import logging
import time
from typing import Optional

from pubsub import pub
from pydantic import ValidationError

from ..config import StatusConfig
from ..models.events import (
    ENGINE_TOPICS,
    EngineEvent,
    ShutdownRequested,
    TranscriptionSucceeded,
)
from ..models.history import TranscriptionEntry
from ..models.status import StatusRecord
from ..publishing.base import AbstractTransport
from ..publishing.file_transport import FileTransport
from ..publishing.status_publisher import StatusPublisher
from ..publishing.waybar import WaybarNotifier
from ..storage.history_store import HistoryStore
from ..storage.paths import PathResolver, ResolvedPaths
from .write_queue import OrderedWriteQueue

logger = logging.getLogger(__name__)


class PublicationService:
    """Subscribes to the Engine topics and publishes status and history.

    Handlers run on the Engine's thread: they apply the state transition
    immediately (so ordering follows event order) and hand the actual file
    write to a per-file background queue. Nothing raised here reaches the
    Engine.
    """

    def __init__(self, config: StatusConfig,
                 transport: Optional[AbstractTransport] = None,
                 resolver: Optional[PathResolver] = None):
        """Initialize publication service.

        Args:
            config: Application configuration
            transport: Transport override; defaults to files at the resolved paths
            resolver: Path resolver used when no transport is given
        """
        self.config = config
        self.paths: Optional[ResolvedPaths] = None

        if transport is None:
            resolver = resolver or PathResolver()
            self.paths = resolver.resolve(config.get_status_file(), config.get_history_file())
            notifier = WaybarNotifier(
                signal_number=int(config.get('waybar.signal_number', 8)),
                enabled=bool(config.get('waybar.signal', True)),
            )
            transport = FileTransport(self.paths, notifier)
        self.transport = transport

        self.status_publisher = StatusPublisher(transport)
        self.history_store = HistoryStore(transport, config.get_max_history())

        queue_size = int(config.get('writer.queue_size', 64))
        self.status_queue = OrderedWriteQueue("status", queue_size)
        self.history_queue = OrderedWriteQueue("history", queue_size)
        self.shutdown_timeout = float(config.get('writer.shutdown_timeout_seconds', 2.0))

        self.is_running = False

    def start(self) -> None:
        """Subscribe to the Engine topics and publish the startup status."""
        if self.is_running:
            return
        for topic in ENGINE_TOPICS:
            pub.subscribe(self.on_event, topic)
        self.is_running = True

        record = self.status_publisher.transition_to_ready()
        self._queue_status(record)
        logger.info(f"Publication service started - subscribed to {len(ENGINE_TOPICS)} engine topics")

    def on_event(self, event: EngineEvent) -> None:
        """Handle one Engine event. Never raises."""
        try:
            record = self.status_publisher.transition(event)
        except TypeError as e:
            logger.error(f"Ignoring event: {e}")
            return

        self._queue_status(record)

        if isinstance(event, TranscriptionSucceeded):
            try:
                entry = TranscriptionEntry.now(event.text)
            except ValidationError as e:
                logger.error(f"Dropping transcription with invalid text: {e.error_count()} errors")
                return
            self.history_queue.submit(
                f"append {len(entry.text)} chars",
                lambda: self.history_store.append(entry),
            )

    def _queue_status(self, record: StatusRecord) -> None:
        self.status_queue.submit(
            f"{record.status_class.value} ({record.tooltip})",
            lambda: self.status_publisher.write(record),
            coalesce=True,
        )

    def shutdown(self, timeout: Optional[float] = None) -> bool:
        """Publish the final "Not running" status and drain both queues.

        Args:
            timeout: Overall deadline in seconds (defaults to writer.shutdown_timeout_seconds)

        Returns:
            True if all pending writes completed before the deadline
        """
        timeout = self.shutdown_timeout if timeout is None else timeout
        logger.info("Shutting down publication service...")

        if self.is_running:
            for topic in ENGINE_TOPICS:
                try:
                    pub.unsubscribe(self.on_event, topic)
                except Exception as e:
                    logger.warning(f"Error during unsubscribe from {topic}: {e}")
            self.is_running = False

        if self.status_publisher.running:
            self.on_event(ShutdownRequested())

        deadline = time.monotonic() + timeout
        status_ok = self.status_queue.shutdown(timeout)
        history_ok = self.history_queue.shutdown(max(0.0, deadline - time.monotonic()))

        logger.info(f"Publication service shutdown complete "
                    f"(status: {self.status_queue.stats()}, history: {self.history_queue.stats()})")
        return status_ok and history_ok

