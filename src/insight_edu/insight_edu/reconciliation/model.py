from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.enums import SyncOutcome


@dataclass(frozen=True)
class StudentOutcome:
    """What one reconciliation pass decided for one student."""

    student_id: str
    name: str
    outcome: SyncOutcome
    previous: int = 0
    computed: Optional[int] = None
    error: Optional[str] = None

    @property
    def delta(self) -> int:
        if self.computed is None:
            return 0
        return self.computed - self.previous

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "outcome": self.outcome.value,
            "previous": self.previous,
            "computed": self.computed,
            "error": self.error,
        }


@dataclass(frozen=True)
class ChangeLine:
    student_id: str
    name: str
    previous: int
    computed: int
    delta: int


@dataclass(frozen=True)
class FailureLine:
    student_id: str
    name: str
    reason: str


@dataclass(frozen=True)
class SyncSummary:
    """Immutable result of a run.

    In a dry run `updated` counts the students that *would* be updated and
    nothing was written.
    """

    dry_run: bool
    total: int
    updated: int
    unchanged: int
    errors: int
    changes: Tuple[ChangeLine, ...] = ()
    failures: Tuple[FailureLine, ...] = ()

    @property
    def has_discrepancies(self) -> bool:
        return bool(self.changes)

    @property
    def applied(self) -> bool:
        return not self.dry_run and self.updated > 0

    def to_dict(self) -> dict:
        return {
            "dry_run": self.dry_run,
            "total": self.total,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "errors": self.errors,
            "changes": [
                {
                    "student_id": c.student_id,
                    "name": c.name,
                    "previous": c.previous,
                    "computed": c.computed,
                    "delta": c.delta,
                }
                for c in self.changes
            ],
            "failures": [{"student_id": f.student_id, "name": f.name, "reason": f.reason} for f in self.failures],
        }
