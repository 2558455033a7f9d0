"""Sync cached student attendance from attendance records.

Usage:
    python scripts/sync_student_attendance.py
    python scripts/sync_student_attendance.py --dry-run
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.insight_edu.insight_edu.reconciliation.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
