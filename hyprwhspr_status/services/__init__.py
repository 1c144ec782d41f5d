"""Services wiring the Engine event feed to the publishers."""

from .write_queue import OrderedWriteQueue
from .publication_service import PublicationService

__all__ = ["OrderedWriteQueue", "PublicationService"]
