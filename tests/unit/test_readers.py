"""Unit tests for the consumer-side readers."""

import json
import pytest
from pathlib import Path

from hyprwhspr_status.errors import HistoryParseError
from hyprwhspr_status.models.status import StatusClass, StatusRecord
from hyprwhspr_status.storage.atomic_writer import write_atomic
from hyprwhspr_status.storage.readers import (
    is_recording,
    load_history_strict,
    read_history,
    read_status,
    watch_status,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


@pytest.mark.unit
class TestReadStatus:
    """Test cases for status reading."""

    def test_missing_file_is_default(self, temp_data_dir):
        record = read_status(Path(temp_data_dir) / "status.json")

        assert record == StatusRecord.default()
        assert record.status_class == StatusClass.INACTIVE

    def test_corrupt_file_is_default(self, temp_data_dir):
        path = Path(temp_data_dir) / "status.json"
        path.write_text('{"text": "', encoding="utf-8")

        assert read_status(path) == StatusRecord.default()

    def test_reads_written_record(self, temp_data_dir):
        path = Path(temp_data_dir) / "status.json"
        write_atomic(path, StatusRecord.derive(StatusClass.ACTIVE).to_bytes())

        assert read_status(path).status_class == StatusClass.ACTIVE
        assert is_recording(path)

    def test_is_recording_false_when_missing(self, temp_data_dir):
        assert not is_recording(Path(temp_data_dir) / "status.json")

    def test_directory_in_place_of_file_is_default(self, temp_data_dir):
        path = Path(temp_data_dir) / "status.json"
        path.mkdir()

        assert read_status(path) == StatusRecord.default()

    def test_parent_is_a_file_is_default(self, temp_data_dir):
        blocker = Path(temp_data_dir) / "blocker"
        blocker.write_text("file in the way")

        assert read_status(blocker / "hyprwhspr-rs" / "status.json") == StatusRecord.default()


@pytest.mark.unit
class TestReadHistory:
    """Test cases for history reading."""

    def test_missing_file_is_empty(self, temp_data_dir):
        assert read_history(Path(temp_data_dir) / "transcriptions.json") == []

    def test_corrupt_file_is_empty(self, temp_data_dir):
        path = Path(temp_data_dir) / "transcriptions.json"
        path.write_text("[{]", encoding="utf-8")

        assert read_history(path) == []

    def test_unreadable_paths_are_empty(self, temp_data_dir):
        directory = Path(temp_data_dir) / "transcriptions.json"
        directory.mkdir()
        blocker = Path(temp_data_dir) / "blocker"
        blocker.write_text("file in the way")

        assert read_history(directory) == []
        assert load_history_strict(blocker / "transcriptions.json") == []

    def test_strict_reader_raises_on_corrupt(self, temp_data_dir):
        path = Path(temp_data_dir) / "transcriptions.json"
        path.write_text('[{"text": 1}]', encoding="utf-8")

        with pytest.raises(HistoryParseError):
            load_history_strict(path)

    def test_reads_entries(self, temp_data_dir):
        path = Path(temp_data_dir) / "transcriptions.json"
        path.write_text(json.dumps([
            {"text": "b", "timestamp": "2024-01-01 10:01"},
            {"text": "a", "timestamp": "2024-01-01 10:00"},
        ]), encoding="utf-8")

        assert [e.text for e in read_history(path)] == ["b", "a"]


@pytest.mark.unit
class TestWatchStatus:
    """Test cases for the polling watcher."""

    def test_emits_initial_then_changes(self, temp_data_dir):
        path = Path(temp_data_dir) / "status.json"
        clock = FakeClock()
        watcher = watch_status(path, interval=1.0, keepalive=30.0, sleep=clock.sleep, clock=clock)

        assert next(watcher).tooltip == "Not running"

        write_atomic(path, StatusRecord.derive(StatusClass.ACTIVE).to_bytes())
        assert next(watcher).status_class == StatusClass.ACTIVE

        write_atomic(path, StatusRecord.derive(StatusClass.PROCESSING).to_bytes())
        assert next(watcher).status_class == StatusClass.PROCESSING

    def test_keepalive_reemits_unchanged_status(self, temp_data_dir):
        path = Path(temp_data_dir) / "status.json"
        write_atomic(path, StatusRecord.derive(StatusClass.INACTIVE).to_bytes())
        clock = FakeClock()
        watcher = watch_status(path, interval=1.0, keepalive=5.0, sleep=clock.sleep, clock=clock)

        next(watcher)
        record = next(watcher)

        assert record.tooltip == "Ready"
        assert clock.now == 5.0

    def test_unusable_parent_keeps_watching(self, temp_data_dir):
        blocker = Path(temp_data_dir) / "blocker"
        blocker.write_text("file in the way")
        clock = FakeClock()
        watcher = watch_status(blocker / "status.json", interval=1.0, keepalive=2.0,
                               sleep=clock.sleep, clock=clock)

        assert next(watcher) == StatusRecord.default()
        assert next(watcher) == StatusRecord.default()
