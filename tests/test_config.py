from __future__ import annotations

from pathlib import Path

import pytest

from eventlog.config import EventLogConfig
from eventlog.runtime.store import EventLogStore
from eventlog.ui.console import NullSink


def _clear_env(monkeypatch) -> None:
    for key in ("EVENTLOG_STORAGE_ROOT", "EVENTLOG_CONSOLE", "EVENTLOG_CONSOLE_LOGGING", "EVENTLOG_PERSISTED", "EVENTLOG_CONFIG"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_from_env(monkeypatch) -> None:
    _clear_env(monkeypatch)
    config = EventLogConfig.from_env()
    assert config.storage_root == Path("eventlogs")
    assert config.console == "plain"
    assert config.console_logging is True
    assert config.persisted is True


def test_env_values(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("EVENTLOG_STORAGE_ROOT", str(tmp_path))
    monkeypatch.setenv("EVENTLOG_CONSOLE", "off")
    monkeypatch.setenv("EVENTLOG_PERSISTED", "no")
    config = EventLogConfig.from_env()
    assert config.storage_root == tmp_path
    assert config.console == "off"
    assert config.persisted is False


def test_file_values_win_over_env(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("EVENTLOG_CONSOLE", "rich")
    monkeypatch.setenv("EVENTLOG_PERSISTED", "false")
    path = tmp_path / "eventlog.yaml"
    path.write_text(
        f"storage_root: '{tmp_path / 'logs'}'\nconsole: 'off'\nwriter_queue_size: 5\n",
        encoding="utf-8",
    )
    config = EventLogConfig.from_env_or_file(str(path))
    assert config.storage_root == tmp_path / "logs"
    assert config.console == "off"
    assert config.writer_queue_size == 5
    assert config.persisted is False


def test_non_mapping_file_is_rejected(tmp_path) -> None:
    path = tmp_path / "eventlog.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        EventLogConfig.from_env_or_file(str(path))


def test_store_from_config(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)
    config = EventLogConfig.from_dict({"storage_root": str(tmp_path), "console": "off", "console_logging": False})
    store = EventLogStore.from_config(config)
    assert isinstance(store.sink, NullSink)
    log = store.get("Configured")
    assert log.console_logging_enabled is False
    log.add("Saved")
    assert store.flush(timeout=5.0)
    assert (tmp_path / "EventLog-Configured.json").exists()
    store.close()
