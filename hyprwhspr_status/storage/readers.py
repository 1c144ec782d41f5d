"""Consumer-side readers for the published documents.

Readers never assume a file exists and always re-parse the whole document:
a missing or corrupt status file reads as the default inactive record, a
missing or corrupt history file reads as an empty list.
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from ..errors import HistoryParseError
from ..models.history import TranscriptionEntry, parse_history
from ..models.status import StatusClass, StatusRecord
from .atomic_writer import read_bytes

logger = logging.getLogger(__name__)

# Paths that cannot be opened at all read the same as a missing file
UNREADABLE_ERRORS = (NotADirectoryError, IsADirectoryError, PermissionError)


def _read_document(path: Path) -> Optional[bytes]:
    try:
        return read_bytes(path)
    except UNREADABLE_ERRORS as e:
        logger.warning(f"Cannot read {path}, treating it as missing: {e}")
        return None


def read_status(path: Path) -> StatusRecord:
    """Read ``status.json``, returning the default record if missing or corrupt."""
    raw = _read_document(path)
    if raw is None:
        return StatusRecord.default()
    try:
        return StatusRecord.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable status file {path}: {e.error_count()} errors")
        return StatusRecord.default()


def load_history_strict(path: Path) -> List[TranscriptionEntry]:
    """Read ``transcriptions.json``.

    Raises:
        HistoryParseError: if the file exists but is not a valid history list
    """
    raw = _read_document(path)
    if raw is None:
        return []
    try:
        return parse_history(raw)
    except ValidationError as e:
        raise HistoryParseError(path, f"Invalid history document ({e.error_count()} errors)") from e


def read_history(path: Path) -> List[TranscriptionEntry]:
    """Read ``transcriptions.json``, returning an empty list if missing or corrupt."""
    try:
        return load_history_strict(path)
    except HistoryParseError as e:
        logger.warning(f"Treating history as empty: {e}")
        return []


def is_recording(path: Path) -> bool:
    """True if the published status says the Engine is recording."""
    return read_status(path).status_class == StatusClass.ACTIVE


def _fingerprint(path: Path) -> Optional[Tuple[int, int]]:
    try:
        stat = os.stat(path)
    except (FileNotFoundError,) + UNREADABLE_ERRORS:
        return None
    return stat.st_mtime_ns, stat.st_ino


def watch_status(path: Path, interval: float = 0.25, keepalive: float = 30.0,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic) -> Iterator[StatusRecord]:
    """Yield the status on start, on every change, and after ``keepalive`` idle seconds.

    A rename installs a new inode, so (mtime, inode) changes on every
    atomic replace even within one mtime tick.
    """
    last_seen = _fingerprint(path)
    last_emit = clock()
    yield read_status(path)

    while True:
        sleep(interval)
        current = _fingerprint(path)
        now = clock()
        if current != last_seen or now - last_emit >= keepalive:
            last_seen = current
            last_emit = now
            yield read_status(path)
