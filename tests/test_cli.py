from __future__ import annotations

import json

from eventlog.cli import main
from eventlog.runtime.storage import LocalFileStorage
from eventlog.runtime.store import EventLogStore
from eventlog.ui.console import NullSink


def _seed(root, clock) -> None:
    store = EventLogStore(LocalFileStorage(root), clock=clock, sink=NullSink())
    log = store.get("Session")
    clock.advance(1)
    log.add("Login", {"user": "ada"})
    clock.advance(60.01)
    log.add("Logout")
    assert store.flush(timeout=5.0)
    store.close()


def test_show_and_export(tmp_path, clock, capsys, monkeypatch) -> None:
    monkeypatch.setenv("EVENTLOG_CONFIG", str(tmp_path / "missing.yaml"))
    _seed(tmp_path, clock)

    assert main(["--storage-root", str(tmp_path), "show", "Session"]) == 0
    assert capsys.readouterr().out == "1.00: Login\n1:01.01: Logout\n"

    assert main(["--storage-root", str(tmp_path), "export", "Session", "--pretty"]) == 0
    exported = json.loads(capsys.readouterr().out)
    assert exported["name"] == "Session"
    assert exported["events"][0]["user"] == "ada"

    output = tmp_path / "out.json"
    assert main(["--storage-root", str(tmp_path), "export", "Session", "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["events"][1]["title"] == "Logout"


def test_list_and_reset(tmp_path, clock, capsys, monkeypatch) -> None:
    monkeypatch.setenv("EVENTLOG_CONFIG", str(tmp_path / "missing.yaml"))
    _seed(tmp_path, clock)

    assert main(["--storage-root", str(tmp_path), "list"]) == 0
    assert capsys.readouterr().out == "Session\n"

    assert main(["--storage-root", str(tmp_path), "reset", "Session"]) == 0
    assert not (tmp_path / "EventLog-Session.json").exists()

    assert main(["--storage-root", str(tmp_path), "show", "Session"]) == 1
    assert "No saved event log" in capsys.readouterr().err
