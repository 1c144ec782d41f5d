"""Filesystem transport: documents are files replaced by atomic rename."""

import logging
from pathlib import Path
from typing import Dict, Optional

from ..storage.atomic_writer import read_bytes, write_atomic
from ..storage.paths import ResolvedPaths
from .base import AbstractTransport, HISTORY_DOCUMENT, STATUS_DOCUMENT
from .waybar import WaybarNotifier

logger = logging.getLogger(__name__)


class FileTransport(AbstractTransport):
    """Writes documents to their resolved paths with ``write_atomic``."""

    def __init__(self, paths: ResolvedPaths, notifier: Optional[WaybarNotifier] = None):
        """Initialize file transport.

        Args:
            paths: Resolved target files
            notifier: Optional status bar notifier signalled after status writes
        """
        self.paths = paths
        self.notifier = notifier
        self._targets: Dict[str, Path] = {
            STATUS_DOCUMENT: paths.status_file,
            HISTORY_DOCUMENT: paths.history_file,
        }

    def path_for(self, document: str) -> Path:
        try:
            return self._targets[document]
        except KeyError:
            raise ValueError(f"Unknown document: {document}") from None

    def write(self, document: str, data: bytes) -> None:
        write_atomic(self.path_for(document), data)
        self.after_write(document)

    def read(self, document: str) -> Optional[bytes]:
        return read_bytes(self.path_for(document))

    def after_write(self, document: str) -> None:
        if document == STATUS_DOCUMENT and self.notifier is not None:
            self.notifier.notify()
