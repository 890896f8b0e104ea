from .console import ConsoleSink, NullSink, PlainConsoleSink, RichConsoleSink, create_sink, format_console_line

__all__ = [
    "ConsoleSink",
    "NullSink",
    "PlainConsoleSink",
    "RichConsoleSink",
    "create_sink",
    "format_console_line",
]
