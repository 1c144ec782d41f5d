"""Ordered background write queue, one per published file."""

import itertools
import logging
import queue
import threading
import time
from typing import Callable, Dict, NamedTuple, Optional

from ..errors import StatusPublicationError

logger = logging.getLogger(__name__)


class WriteTask(NamedTuple):
    """A write waiting for the worker thread."""
    sequence: int
    description: str
    action: Callable[[], None]
    coalesce: bool


class OrderedWriteQueue:
    """Runs writes for one file on a single worker thread, in enqueue order.

    Producers never block: if the queue is full the write is dropped and
    logged. Coalescable writes (status) share a single "latest" slot: while
    one is pending, a newer one replaces it in place, so only the most recent
    status is written and a burst of events can never fill the queue.
    """

    def __init__(self, name: str, max_size: int = 64):
        """Initialize write queue.

        Args:
            name: Name used for the worker thread and log lines
            max_size: Maximum number of queued writes before new ones are dropped
        """
        self.name = name
        self.task_queue: "queue.Queue[Optional[WriteTask]]" = queue.Queue(maxsize=max_size)
        self.shutdown_event = threading.Event()
        self._sequence = itertools.count(1)
        self._state_lock = threading.Lock()
        self._latest: Optional[WriteTask] = None

        self.completed = 0
        self.failed = 0
        self.dropped = 0
        self.coalesced = 0

        self.worker_thread = threading.Thread(target=self._worker_loop, daemon=True)
        self.worker_thread.name = f"writer_{name}"
        self.worker_thread.start()
        logger.info(f"Started {self.name} write queue (max_size={max_size})")

    def submit(self, description: str, action: Callable[[], None], coalesce: bool = False) -> bool:
        """Queue a write without blocking.

        Args:
            description: Short text for log lines
            action: Callable performing the write
            coalesce: Whether a newer coalescable write may replace this one while it is pending

        Returns:
            True if queued, False if dropped (queue full or shutting down)
        """
        if self.shutdown_event.is_set():
            logger.warning(f"[{self.name}] Shutting down, dropping write: {description}")
            self.dropped += 1
            return False

        with self._state_lock:
            task = WriteTask(next(self._sequence), description, action, coalesce)
            if coalesce and self._latest is not None:
                logger.debug(f"[{self.name}] Write #{task.sequence} supersedes #{self._latest.sequence}")
                self._latest = task
                self.coalesced += 1
                return True
            try:
                self.task_queue.put_nowait(task)
            except queue.Full:
                self.dropped += 1
                logger.warning(f"[{self.name}] Write queue full, dropping write: {description}")
                return False
            if coalesce:
                self._latest = task

        logger.debug(f"[{self.name}] Queued write #{task.sequence}: {description}")
        return True

    def _take_latest(self, task: WriteTask) -> WriteTask:
        if not task.coalesce:
            return task
        with self._state_lock:
            latest, self._latest = self._latest, None
        return latest or task

    def _worker_loop(self) -> None:
        thread_name = threading.current_thread().name
        logger.debug(f"Writer thread {thread_name} starting")
        while True:
            task = self.task_queue.get()
            if task is None:
                logger.debug(f"Writer {thread_name} received sentinel, exiting.")
                self.task_queue.task_done()
                break

            task = self._take_latest(task)
            try:
                task.action()
                self.completed += 1
            except StatusPublicationError as e:
                self.failed += 1
                logger.error(f"[{self.name}] Write failed ({task.description}): {e}")
            except Exception as e:
                self.failed += 1
                logger.error(f"[{self.name}] Unhandled exception in write ({task.description}): {e}",
                             exc_info=True)
            finally:
                self.task_queue.task_done()

    def wait_idle(self, timeout: float) -> bool:
        """Wait until every queued write has run. Returns False on timeout."""
        deadline = time.monotonic() + timeout
        while self.task_queue.unfinished_tasks:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def shutdown(self, timeout: float = 2.0) -> bool:
        """Drain pending writes within ``timeout`` seconds and stop the worker.

        Returns:
            True if every pending write ran before the deadline
        """
        logger.info(f"[{self.name}] Waiting up to {timeout}s for write queue to empty...")
        drained = self.wait_idle(timeout)
        self.shutdown_event.set()
        if not drained:
            logger.warning(f"[{self.name}] Timeout reached, {self.task_queue.unfinished_tasks} writes remain.")
            return False

        self.task_queue.put(None)
        self.worker_thread.join(0.5)
        if self.worker_thread.is_alive():
            logger.warning(f"Writer thread {self.worker_thread.name} did not terminate cleanly.")
        logger.info(f"{self.name} write queue shutdown complete.")
        return True

    def stats(self) -> Dict[str, int]:
        return {
            "pending": self.task_queue.qsize(),
            "completed": self.completed,
            "failed": self.failed,
            "dropped": self.dropped,
            "coalesced": self.coalesced,
        }
