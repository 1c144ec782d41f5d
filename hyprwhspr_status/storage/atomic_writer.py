"""Atomic file replacement via a sibling temporary file and rename."""

import logging
import os
from pathlib import Path
from typing import Optional

from ..errors import WriteError

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"


def temp_path_for(path: Path) -> Path:
    """Sibling temporary path (same directory, so the rename stays on one filesystem)."""
    return path.with_name(path.name + TMP_SUFFIX)


def write_atomic(path, data: bytes) -> None:
    """Replace ``path`` with ``data`` so readers see the old or the new file, never a mix.

    Args:
        path: Target file
        data: Complete new file content

    Raises:
        WriteError: if any step fails; the previous file is left untouched
    """
    path = Path(path)
    tmp_path = temp_path_for(path)

    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        _discard(tmp_path)
        raise WriteError(path, f"Atomic write failed ({e})") from e

    logger.debug(f"Wrote {len(data)} bytes to {path}")


def read_bytes(path) -> Optional[bytes]:
    """Read a published document; None if it does not exist."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return None


def _discard(tmp_path: Path) -> None:
    try:
        tmp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {tmp_path}: {e}")
