"""Student attendance synchronization.

Recomputes every student's attendance percentage from sessions and
attendance marks and updates the cached `students.attendance` column where it
disagrees.

Usage:
    insight-edu-sync
    insight-edu-sync --dry-run
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from config import get_settings_module

from ..container import build_container
from ..core.constants import DEFAULT_SYNC_WORKERS
from ..core.exceptions import DataStoreError
from ..database.connection import DatabaseConnection, DBConfig
from .report import render_summary

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="insight-edu-sync",
        description="Synchronize cached student attendance with attendance records.",
    )
    parser.add_argument("--dry-run", action="store_true", help="report discrepancies without writing them")
    parser.add_argument("--workers", type=int, default=None, help="number of students processed in parallel")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    level_name = (args.log_level or getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)

    workers = args.workers or int(getattr(settings, "SYNC_MAX_WORKERS", DEFAULT_SYNC_WORKERS))
    db = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    try:
        with db as conn:
            container = build_container(conn=conn, max_workers=workers)
            summary = container.sync_service.run(dry_run=args.dry_run)
    except DataStoreError as e:
        logger.error("Synchronization aborted: %s", e)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Synchronization aborted: %s", e)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    for line in render_summary(summary):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
