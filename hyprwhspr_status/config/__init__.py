"""Simple YAML configuration loader for the hyprwhspr status publisher."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Mapping
import logging

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "status.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_CONFIG: Dict[str, Any] = {
    "paths": {
        # Empty means: resolve from XDG_CACHE_HOME / XDG_DATA_HOME
        "status_file": None,
        "history_file": None,
    },
    "history": {
        "max_entries": 20,
    },
    "writer": {
        "queue_size": 64,
        "shutdown_timeout_seconds": 2.0,
    },
    "waybar": {
        "signal": True,
        "signal_number": 8,
    },
    "logging": {
        "level": "INFO",
        "file_path": None,
        "console_output": True,
    },
}


def default_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """``${XDG_CONFIG_HOME:-$HOME/.config}/hyprwhspr-rs/status.yaml``."""
    env = os.environ if env is None else env
    base = env.get("XDG_CONFIG_HOME") or str(Path(env.get("HOME", "~")).expanduser() / ".config")
    return Path(base) / "hyprwhspr-rs" / CONFIG_FILE_NAME


def default_log_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """``${XDG_STATE_HOME:-$HOME/.local/state}/hyprwhspr-rs/status.log``."""
    env = os.environ if env is None else env
    base = env.get("XDG_STATE_HOME") or str(Path(env.get("HOME", "~")).expanduser() / ".local" / "state")
    return Path(base) / "hyprwhspr-rs" / "status.log"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


class StatusConfig:
    """Status publisher configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, the default location is
                        used when it exists, otherwise built-in defaults apply.
        """
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path is not None:
            self.config_file: Optional[Path] = Path(config_path)
            if not self.config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
        else:
            candidate = default_config_path()
            self.config_file = candidate if candidate.exists() else None

        if self.config_file is not None:
            logger.info(f"Loading configuration from: {self.config_file}")
            _merge(self.config, self._load_config())
        else:
            logger.info("No configuration file found, using defaults")

        self.get_log_level()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ValueError(f"Failed to load configuration: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        self._resolve_paths(config)
        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        for section, key in (("paths", "status_file"), ("paths", "history_file"),
                             ("logging", "file_path")):
            value = (config.get(section) or {}).get(key)
            if value:
                value = os.path.expanduser(str(value))
                if not os.path.isabs(value):
                    value = str(config_dir / value)
                config[section][key] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'history.max_entries').

        Args:
            key_path: Dot-separated key path
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'waybar.signal')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_status_file(self) -> Optional[Path]:
        value = self.get('paths.status_file')
        return Path(value) if value else None

    def get_history_file(self) -> Optional[Path]:
        value = self.get('paths.history_file')
        return Path(value) if value else None

    def get_log_file(self) -> Path:
        value = self.get('logging.file_path')
        return Path(value) if value else default_log_path()

    def get_log_level(self) -> str:
        value = str(self.get('logging.level', 'INFO')).upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {value}")
        return value

    def get_max_history(self) -> int:
        value = int(self.get('history.max_entries', 20))
        if value < 1:
            raise ValueError(f"history.max_entries must be positive, got {value}")
        return value
