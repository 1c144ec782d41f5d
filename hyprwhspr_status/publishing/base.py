"""Abstract transport for published documents."""

from abc import ABC, abstractmethod
from typing import Optional
import logging

logger = logging.getLogger(__name__)

STATUS_DOCUMENT = "status"
HISTORY_DOCUMENT = "history"


class AbstractTransport(ABC):
    """Where publishers deliver their documents.

    A document is addressed by name (``status`` or ``history``); the
    transport decides how it reaches consumers.
    """

    @abstractmethod
    def write(self, document: str, data: bytes) -> None:
        """Replace a document with ``data``.

        Args:
            document: Document name
            data: Complete serialized document

        Raises:
            WriteError: if delivery failed; the previous content must stay intact
        """
        pass

    @abstractmethod
    def read(self, document: str) -> Optional[bytes]:
        """Return the current content of a document, or None if it does not exist."""
        pass

    def after_write(self, document: str) -> None:
        """Hook run after a successful write."""
        pass
