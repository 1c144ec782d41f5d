"""Tests for the hyprwhspr-status command line."""

import functools
import json
import logging
import pytest
from pathlib import Path

from hyprwhspr_status import main as main_module
from hyprwhspr_status.main import main
from hyprwhspr_status.models.status import StatusClass, StatusRecord
from hyprwhspr_status.storage.atomic_writer import write_atomic
from hyprwhspr_status.storage.paths import PathResolver


@pytest.fixture
def cli_env(temp_data_dir, monkeypatch):
    """Point every XDG directory into the temp directory."""
    root = Path(temp_data_dir)
    monkeypatch.setenv("HOME", str(root / "home"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(root / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(root / "data"))
    monkeypatch.setenv("XDG_STATE_HOME", str(root / "state"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(root / "config"))
    config_dir = root / "config" / "hyprwhspr-rs"
    config_dir.mkdir(parents=True)
    (config_dir / "status.yaml").write_text(
        "waybar:\n  signal: false\nlogging:\n  console_output: false\n", encoding="utf-8"
    )
    yield {
        "status": root / "cache" / "hyprwhspr-rs" / "status.json",
        "history": root / "data" / "hyprwhspr-rs" / "transcriptions.json",
    }
    logging.getLogger().handlers.clear()


def run_cli(*argv):
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


def test_status_json_defaults_when_missing(cli_env, capsys):
    assert run_cli("status", "--json") == 0

    data = json.loads(capsys.readouterr().out)
    assert data == {"text": "󰍭", "tooltip": "Not running", "class": "inactive", "alt": "inactive"}


def test_status_json_reads_file(cli_env, capsys):
    cli_env["status"].parent.mkdir(parents=True)
    write_atomic(cli_env["status"], StatusRecord.derive(StatusClass.ACTIVE).to_bytes())

    assert run_cli("status", "--json") == 0

    assert json.loads(capsys.readouterr().out)["class"] == "active"


def test_status_panel(cli_env, capsys):
    assert run_cli("status") == 0

    assert "Not running" in capsys.readouterr().out


def test_simulate_success(cli_env, capsys):
    assert run_cli("simulate", "hello", "world", "--delay", "0") == 0

    status = json.loads(cli_env["status"].read_text(encoding="utf-8"))
    history = json.loads(cli_env["history"].read_text(encoding="utf-8"))
    assert status["tooltip"] == "Not running"
    assert history[0]["text"] == "hello world"


def test_simulate_failure_keeps_history_untouched(cli_env):
    assert run_cli("simulate", "--fail", "disk full", "--delay", "0") == 0

    assert json.loads(cli_env["status"].read_text(encoding="utf-8"))["class"] == "inactive"
    assert not cli_env["history"].exists()


def test_history_json_and_clear(cli_env, capsys):
    run_cli("simulate", "first", "--delay", "0")
    run_cli("simulate", "second", "--delay", "0")
    capsys.readouterr()

    assert run_cli("history", "--json", "--limit", "1") == 0
    entries = json.loads(capsys.readouterr().out)
    assert [e["text"] for e in entries] == ["second"]

    assert run_cli("clear-history") == 0
    assert json.loads(cli_env["history"].read_text(encoding="utf-8")) == []


def test_history_table_empty(cli_env, capsys):
    assert run_cli("history") == 0

    assert "No transcriptions yet." in capsys.readouterr().out


def test_missing_explicit_config(cli_env, temp_data_dir):
    assert run_cli("--config", str(Path(temp_data_dir) / "nope.yaml"), "status") == 2


def test_status_reads_tmp_fallback(cli_env, temp_data_dir, monkeypatch, capsys):
    root = Path(temp_data_dir)
    blocker = root / "blocker"
    blocker.write_text("file in the way")
    monkeypatch.setenv("XDG_CACHE_HOME", str(blocker))
    monkeypatch.setattr(main_module, "PathResolver",
                        functools.partial(PathResolver, fallback_root=root / "tmp"))
    fallback = root / "tmp" / "hyprwhspr-rs" / "status.json"
    fallback.parent.mkdir(parents=True)
    write_atomic(fallback, StatusRecord.derive(StatusClass.ACTIVE).to_bytes())

    assert run_cli("status", "--json") == 0

    assert json.loads(capsys.readouterr().out)["class"] == "active"


def test_invalid_log_level_in_config(cli_env, temp_data_dir):
    path = Path(temp_data_dir) / "bad.yaml"
    path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")

    assert run_cli("--config", str(path), "status") == 2
