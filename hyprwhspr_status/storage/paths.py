"""XDG path resolution for the published status and history files."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..errors import PathResolutionError

logger = logging.getLogger(__name__)

APP_DIR_NAME = "hyprwhspr-rs"
STATUS_FILE_NAME = "status.json"
HISTORY_FILE_NAME = "transcriptions.json"
FALLBACK_ROOT = Path("/tmp")


@dataclass(frozen=True)
class ResolvedPaths:
    """Target files, resolved once and passed around explicitly."""
    status_file: Path
    history_file: Path


class PathResolver:
    """Resolves target paths from XDG base directories with a /tmp fallback."""

    def __init__(self, env: Optional[Mapping[str, str]] = None,
                 fallback_root: Path = FALLBACK_ROOT):
        """Initialize path resolver.

        Args:
            env: Environment mapping to read XDG_* and HOME from (defaults to os.environ)
            fallback_root: Root used when the XDG location is unusable
        """
        self.env = os.environ if env is None else env
        self.fallback_root = Path(fallback_root)

    def _base_dir(self, xdg_var: str, home_suffix: str) -> Optional[Path]:
        value = self.env.get(xdg_var, "")
        if value:
            return Path(value)
        home = self.env.get("HOME", "")
        if home:
            return Path(home) / home_suffix
        return None

    def _fallback_path(self, file_name: str) -> Path:
        return self.fallback_root / APP_DIR_NAME / file_name

    def cache_path(self) -> Path:
        """Path of ``status.json`` (before directory creation)."""
        base = self._base_dir("XDG_CACHE_HOME", ".cache")
        if base is None:
            logger.warning("Neither XDG_CACHE_HOME nor HOME is set, using fallback location")
            return self._fallback_path(STATUS_FILE_NAME)
        return base / APP_DIR_NAME / STATUS_FILE_NAME

    def data_path(self) -> Path:
        """Path of ``transcriptions.json`` (before directory creation)."""
        base = self._base_dir("XDG_DATA_HOME", ".local/share")
        if base is None:
            logger.warning("Neither XDG_DATA_HOME nor HOME is set, using fallback location")
            return self._fallback_path(HISTORY_FILE_NAME)
        return base / APP_DIR_NAME / HISTORY_FILE_NAME

    def ensure_parent(self, path: Path) -> Path:
        """Create the parent directory of ``path``, falling back to /tmp.

        Returns:
            The path that is actually usable (``path`` or its fallback)

        Raises:
            PathResolutionError: if the fallback directory cannot be created either
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory exists: {path.parent}")
            return path
        except OSError as e:
            logger.error(f"Cannot create directory {path.parent}: {e}")

        fallback = self._fallback_path(path.name)
        if fallback == path:
            raise PathResolutionError(f"Fallback directory is not usable: {path.parent}")
        try:
            fallback.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PathResolutionError(
                f"Cannot create fallback directory {fallback.parent}: {e}") from e
        logger.warning(f"Using fallback location {fallback} instead of {path}")
        return fallback

    def locate(self, path: Path) -> Path:
        """Where a writer would have put ``path``, without creating anything.

        Returns the fallback location when the parent of ``path`` is not a
        directory and a fallback file exists, otherwise ``path`` itself.
        """
        try:
            if path.parent.is_dir():
                return path
        except OSError as e:
            logger.debug(f"Cannot inspect {path.parent}: {e}")

        fallback = self._fallback_path(path.name)
        if fallback != path and fallback.is_file():
            logger.debug(f"Reading fallback location {fallback} instead of {path}")
            return fallback
        return path

    def resolve(self, status_file: Optional[Path] = None,
                history_file: Optional[Path] = None) -> ResolvedPaths:
        """Resolve both targets and create their directories.

        Args:
            status_file: Explicit status path overriding environment resolution
            history_file: Explicit history path overriding environment resolution
        """
        status = Path(status_file) if status_file else self.cache_path()
        history = Path(history_file) if history_file else self.data_path()
        resolved = ResolvedPaths(
            status_file=self.ensure_parent(status),
            history_file=self.ensure_parent(history),
        )
        logger.info(f"Status file: {resolved.status_file}; history file: {resolved.history_file}")
        return resolved
