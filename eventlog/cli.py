#!/usr/bin/env python3
"""
Command-line inspection of saved event logs.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from eventlog.config import EventLogConfig
from eventlog.runtime.storage import LocalFileStorage
from eventlog.runtime.store import EventLogStore
from eventlog.ui.console import NullSink


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect saved event logs")
    parser.add_argument("--storage-root", default=None, help="Directory holding EventLog-<name>.json files")
    parser.add_argument("--config", default=None, help="YAML config file (or set EVENTLOG_CONFIG)")
    parser.add_argument("--log-level", default="WARNING")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List saved log names")

    show = sub.add_parser("show", help="Print the timeline of a saved log")
    show.add_argument("name")

    export = sub.add_parser("export", help="Print or write the JSON export of a saved log")
    export.add_argument("name")
    export.add_argument("--pretty", action="store_true")
    export.add_argument("--output", default=None, help="Write to this file instead of stdout")

    reset = sub.add_parser("reset", help="Delete a saved log")
    reset.add_argument("name")
    return parser


def _open_store(args: argparse.Namespace) -> EventLogStore:
    config = EventLogConfig.from_env_or_file(args.config)
    if args.storage_root:
        config.storage_root = Path(args.storage_root).expanduser()
    return EventLogStore(
        LocalFileStorage(config.storage_root or Path(".")),
        sink=NullSink(),
        console_logging=False,
        persisted=False,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    store = _open_store(args)
    try:
        if args.command == "list":
            for name in store.saved_names():
                print(name)
            return 0

        if args.command == "reset":
            store.reset(args.name)
            return 0

        log = store.load_from_disk(args.name)
        if log is None:
            print(f"No saved event log named {args.name!r}", file=sys.stderr)
            return 1

        if args.command == "show":
            print(log.to_text())
            return 0

        text = log.to_json(pretty=args.pretty)
        if args.output:
            Path(args.output).expanduser().write_text(text + "\n", encoding="utf-8")
        else:
            print(text)
        return 0
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
