#!/usr/bin/env python3
"""
Record a small checkout flow, then print its timeline and JSON export.

Usage:
  python demos/demo_checkout_timeline.py --storage-root /tmp/eventlogs --console rich
"""
from __future__ import annotations

import argparse
import time
from datetime import datetime
from enum import Enum
from pathlib import Path

import eventlog
from eventlog import EventLogStore, EventMessage, LocalFileStorage
from eventlog.ui import create_sink


class Checkout(EventMessage, Enum):
    STARTED = "Checkout started"
    CARD_DECLINED = "Card declined"
    PAID = "Checkout paid"

    @property
    def log_name(self) -> str:
        return "Checkout"


class CartUpdated(EventMessage):
    title = "Cart updated"

    def __init__(self, items: list[str]):
        self.items = items

    @property
    def attributes(self) -> dict:
        return {"items": self.items, "count": len(self.items), "at": datetime.now()}

    @property
    def string_value(self) -> str:
        return f"Cart now has {len(self.items)} item(s)"

    @property
    def log_name(self) -> str:
        return "Checkout"


def main() -> None:
    parser = argparse.ArgumentParser(description="Event log demo")
    parser.add_argument("--storage-root", default="eventlogs")
    parser.add_argument("--console", choices=["rich", "plain", "off"], default="plain")
    parser.add_argument("--reset", action="store_true", help="Start from an empty log")
    args = parser.parse_args()

    store = EventLogStore(
        LocalFileStorage(Path(args.storage_root)),
        sink=create_sink(args.console),
    )
    if args.reset:
        store.reset("Checkout")

    eventlog.add(Checkout.STARTED, store=store)
    eventlog.add(CartUpdated(["tea", "scones"]), store=store)
    time.sleep(0.25)
    eventlog.add(Checkout.CARD_DECLINED, {"reason": "insufficient funds"}, store=store)
    time.sleep(0.25)
    eventlog.add(Checkout.PAID, {"amount": 12.5}, store=store)

    log = store.get("Checkout")
    print("-------------")
    print(log.to_text())
    print("-------------")
    print(log.to_json(pretty=True))
    print("-------------")
    print(f"{Checkout.STARTED.title!r} fired {len(log.events_matching(Checkout.STARTED))} time(s)")

    store.flush(timeout=2.0)
    store.close()


if __name__ == "__main__":
    main()
