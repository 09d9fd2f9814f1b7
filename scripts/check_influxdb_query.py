#!/usr/bin/env python3
"""Icinga2/Nagios plugin executable for check_influxdb_query.

Usage:
    scripts/check_influxdb_query.py --help
"""

from __future__ import annotations

from pathlib import Path
import sys


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from check_influxdb_query.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
