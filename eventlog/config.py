from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Optional
import logging
import os

import yaml

ConsoleMode = Literal["plain", "rich", "off"]

_DEFAULT_CONFIG_PATH = Path("configs/eventlog.yaml")
_DEFAULT_STORAGE_ROOT = Path("eventlogs")
_CONSOLE_MODES = ("plain", "rich", "off")
_logger = logging.getLogger(__name__)


@dataclass
class EventLogConfig:
    storage_root: Optional[Path] = None
    console: Optional[ConsoleMode] = None
    console_logging: Optional[bool] = None
    persisted: Optional[bool] = None
    writer_queue_size: int = 200

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventLogConfig":
        if not isinstance(data, dict):
            return cls()
        storage_root = _to_str_or_none(data.get("storage_root"))
        raw_console = data.get("console")
        # YAML reads a bare `off` as False.
        console = "off" if raw_console is False else _to_str_or_none(raw_console)
        if console:
            console = console.lower()
            if console not in _CONSOLE_MODES:
                _logger.warning("Unknown console mode %r in config; using plain", console)
                console = "plain"
        return cls(
            storage_root=Path(storage_root).expanduser() if storage_root else None,
            console=console or None,  # type: ignore[arg-type]
            console_logging=_to_bool(data.get("console_logging")),
            persisted=_to_bool(data.get("persisted")),
            writer_queue_size=_to_int(data.get("writer_queue_size")) or cls.writer_queue_size,
        )

    def apply_env_fallbacks(self) -> None:
        if self.storage_root is None:
            env_root = os.getenv("EVENTLOG_STORAGE_ROOT", "").strip()
            self.storage_root = Path(env_root).expanduser() if env_root else _DEFAULT_STORAGE_ROOT
        if self.console is None:
            console = os.getenv("EVENTLOG_CONSOLE", "").strip().lower()
            self.console = console if console in _CONSOLE_MODES else "plain"  # type: ignore[assignment]
        if self.console_logging is None:
            value = _to_bool(os.getenv("EVENTLOG_CONSOLE_LOGGING", ""))
            self.console_logging = True if value is None else value
        if self.persisted is None:
            value = _to_bool(os.getenv("EVENTLOG_PERSISTED", ""))
            self.persisted = True if value is None else value

    @staticmethod
    def from_env() -> "EventLogConfig":
        config = EventLogConfig()
        config.apply_env_fallbacks()
        return config

    @staticmethod
    def from_env_or_file(path: Optional[str] = None) -> "EventLogConfig":
        config_path = Path(path) if path else Path(os.getenv("EVENTLOG_CONFIG", str(_DEFAULT_CONFIG_PATH)))
        if config_path.exists():
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
            if not isinstance(raw, dict):
                raise ValueError(f"EventLog config must be a mapping: {config_path}")
            config = EventLogConfig.from_dict(raw)
            config.apply_env_fallbacks()
            _logger.debug("Loaded event log config from %s", config_path)
            return config
        return EventLogConfig.from_env()


def _to_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off"}:
            return False
    return None


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _to_str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["EventLogConfig", "ConsoleMode"]
