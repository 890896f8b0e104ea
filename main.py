#!/usr/bin/env python3
"""
Entry point for inspecting saved event logs.
"""
from __future__ import annotations

import sys

from eventlog.cli import main


if __name__ == "__main__":
    sys.exit(main())
