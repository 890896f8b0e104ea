#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File storage capability used for event log snapshots.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Protocol
import os
import tempfile

SNAPSHOT_PREFIX = "EventLog-"
SNAPSHOT_SUFFIX = ".json"


def snapshot_filename(name: str) -> str:
    return f"{SNAPSHOT_PREFIX}{name}{SNAPSHOT_SUFFIX}"


def log_name_from_filename(filename: str) -> str | None:
    if not (filename.startswith(SNAPSHOT_PREFIX) and filename.endswith(SNAPSHOT_SUFFIX)):
        return None
    name = filename[len(SNAPSHOT_PREFIX): -len(SNAPSHOT_SUFFIX)]
    return name or None


class FileStorage(Protocol):
    def read_text(self, key: str) -> str: ...

    def write_text(self, key: str, text: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def list_keys(self) -> List[str]: ...


class LocalFileStorage:
    """Stores each key as a UTF-8 file directly under ``root``."""

    def __init__(self, root: Path):
        self.root = Path(root).expanduser().resolve()

    def path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if path.parent != self.root:
            raise ValueError(f"Storage key escapes storage root: {key!r}")
        return path

    def read_text(self, key: str) -> str:
        return self.path_for(key).read_text(encoding="utf-8")

    def write_text(self, key: str, text: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def delete(self, key: str) -> None:
        self.path_for(key).unlink()

    def list_keys(self) -> List[str]:
        if not self.root.exists():
            return []
        return sorted(entry.name for entry in self.root.iterdir() if entry.is_file())


__all__ = [
    "FileStorage",
    "LocalFileStorage",
    "snapshot_filename",
    "log_name_from_filename",
    "SNAPSHOT_PREFIX",
    "SNAPSHOT_SUFFIX",
]
