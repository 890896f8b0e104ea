from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List

import pytest

from eventlog.runtime.storage import LocalFileStorage
from eventlog.runtime.store import EventLogStore
from eventlog.ui.console import ConsoleSink


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 3, 1, 9, 30, 0, tzinfo=timezone(timedelta(hours=2)))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class RecordingSink(ConsoleSink):
    def __init__(self) -> None:
        self.lines: List[str] = []

    def emit(self, name: str, offset: str, text: str) -> None:
        self.lines.append(f"{name} @ {offset}: {text}")


class CountingStorage(LocalFileStorage):
    def __init__(self, root: Path):
        super().__init__(root)
        self.reads = 0

    def read_text(self, key: str) -> str:
        self.reads += 1
        return super().read_text(key)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def storage(tmp_path) -> CountingStorage:
    return CountingStorage(tmp_path / "logs")


@pytest.fixture
def store(storage, clock, sink):
    store = EventLogStore(storage, clock=clock, sink=sink)
    yield store
    store.close()
