"""Pytest configuration and fixtures for hyprwhspr-status tests."""

import pytest
import tempfile
import logging
from pathlib import Path
from typing import Dict, Optional

from pubsub import pub

from hyprwhspr_status.config import StatusConfig
from hyprwhspr_status.errors import WriteError
from hyprwhspr_status.publishing.base import AbstractTransport
from hyprwhspr_status.storage.paths import PathResolver


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without threads or timing")
    config.addinivalue_line("markers", "integration: tests driving the full publication service")


class MemoryTransport(AbstractTransport):
    """In-memory transport recording every write in order."""

    def __init__(self):
        self.documents: Dict[str, bytes] = {}
        self.writes = []
        self.fail_writes = False

    def write(self, document: str, data: bytes) -> None:
        if self.fail_writes:
            raise WriteError(document, "Simulated failure")
        self.documents[document] = data
        self.writes.append((document, data))

    def read(self, document: str) -> Optional[bytes]:
        return self.documents.get(document)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def memory_transport():
    return MemoryTransport()


@pytest.fixture
def xdg_env(temp_data_dir):
    """Environment with XDG directories inside the temp directory."""
    root = Path(temp_data_dir)
    return {
        "HOME": str(root / "home"),
        "XDG_CACHE_HOME": str(root / "cache"),
        "XDG_DATA_HOME": str(root / "data"),
    }


@pytest.fixture
def resolver(xdg_env, temp_data_dir):
    return PathResolver(env=xdg_env, fallback_root=Path(temp_data_dir) / "tmp")


@pytest.fixture
def test_config(temp_data_dir):
    """Configuration pointing at the temp directory, waybar signalling off."""
    config_file = Path(temp_data_dir) / "status.yaml"
    config_file.write_text(
        "waybar:\n"
        "  signal: false\n"
        "writer:\n"
        "  shutdown_timeout_seconds: 5.0\n"
        "logging:\n"
        "  console_output: false\n",
        encoding="utf-8",
    )
    return StatusConfig(str(config_file))


@pytest.fixture(autouse=True)
def clean_pubsub():
    """Drop all pubsub listeners after each test."""
    yield
    pub.unsubAll()
