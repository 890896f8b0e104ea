from __future__ import annotations

import sys
from typing import Any, Optional, TextIO


def format_console_line(name: str, offset: str, text: str) -> str:
    return f"{name} @ {offset}: {text}"


class ConsoleSink:
    """Receives one line per added event."""

    def emit(self, name: str, offset: str, text: str) -> None:
        pass

    def is_rich(self) -> bool:
        return False


class NullSink(ConsoleSink):
    def emit(self, name: str, offset: str, text: str) -> None:
        return


class PlainConsoleSink(ConsoleSink):
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def emit(self, name: str, offset: str, text: str) -> None:
        print(format_console_line(name, offset, text), file=self._stream or sys.stdout, flush=True)


class RichConsoleSink(ConsoleSink):
    def __init__(self, console: Any = None):
        if console is None:
            from rich.console import Console

            console = Console()
        self._console = console

    def is_rich(self) -> bool:
        return True

    def emit(self, name: str, offset: str, text: str) -> None:
        from rich.markup import escape

        self._console.print(f"[bold]{escape(name)}[/bold] @ [dim]{escape(offset)}[/dim]: {escape(text)}")


def create_sink(mode: str, *, is_tty: Optional[bool] = None) -> ConsoleSink:
    if is_tty is None:
        is_tty = sys.stdout.isatty()
    if mode == "rich" and not is_tty:
        mode = "plain"
    if mode == "off":
        return NullSink()
    if mode == "plain":
        return PlainConsoleSink()
    if mode == "rich":
        return RichConsoleSink()
    raise ValueError(f"Unknown console mode: {mode}")


__all__ = [
    "ConsoleSink",
    "NullSink",
    "PlainConsoleSink",
    "RichConsoleSink",
    "create_sink",
    "format_console_line",
]
