from __future__ import annotations

from typing import List

from ..core.enums import SyncOutcome
from .model import ChangeLine, FailureLine, StudentOutcome, SyncSummary

RULE_WIDTH = 60


class ReportBuilder:
    """Accumulates per-student outcomes into a SyncSummary."""

    def __init__(self, *, dry_run: bool = False):
        self._dry_run = bool(dry_run)
        self._total = 0
        self._updated = 0
        self._unchanged = 0
        self._errors = 0
        self._changes: list[ChangeLine] = []
        self._failures: list[FailureLine] = []

    def add(self, outcome: StudentOutcome) -> None:
        self._total += 1

        if outcome.outcome == SyncOutcome.ERROR:
            self._errors += 1
            self._failures.append(
                FailureLine(
                    student_id=outcome.student_id,
                    name=outcome.name,
                    reason=outcome.error or "unknown error",
                )
            )
            return

        if outcome.outcome == SyncOutcome.UNCHANGED:
            self._unchanged += 1
            return

        expected = SyncOutcome.WOULD_UPDATE if self._dry_run else SyncOutcome.UPDATED
        if outcome.outcome != expected:
            raise ValueError(f"{outcome.outcome.value} outcome in a {'dry' if self._dry_run else 'live'} run")

        self._updated += 1
        self._changes.append(
            ChangeLine(
                student_id=outcome.student_id,
                name=outcome.name,
                previous=outcome.previous,
                computed=int(outcome.computed),
                delta=outcome.delta,
            )
        )

    def build(self) -> SyncSummary:
        return SyncSummary(
            dry_run=self._dry_run,
            total=self._total,
            updated=self._updated,
            unchanged=self._unchanged,
            errors=self._errors,
            changes=tuple(self._changes),
            failures=tuple(self._failures),
        )


def format_delta(delta: int) -> str:
    return f"+{delta}%" if delta > 0 else f"{delta}%"


def format_change(line: ChangeLine) -> str:
    return f"{line.name} ({line.student_id}): {line.previous}% → {line.computed}% ({format_delta(line.delta)})"


def render_summary(summary: SyncSummary) -> List[str]:
    """Human-readable run summary, one string per output line."""
    lines: List[str] = []

    if summary.dry_run:
        lines.append("DRY RUN - no changes were written")
        lines.append("")

    lines.extend(format_change(c) for c in summary.changes)
    if summary.changes:
        lines.append("")

    lines.append("=" * RULE_WIDTH)
    lines.append("Synchronization summary")
    lines.append("=" * RULE_WIDTH)
    lines.append(f"Total students: {summary.total}")
    lines.append(f"{'Would update' if summary.dry_run else 'Updated'}: {summary.updated}")
    lines.append(f"Unchanged: {summary.unchanged}")
    lines.append(f"Errors: {summary.errors}")
    for f in summary.failures:
        lines.append(f"  {f.name} ({f.student_id}): {f.reason}")
    lines.append("=" * RULE_WIDTH)

    if summary.dry_run and summary.has_discrepancies:
        lines.append("Run without --dry-run to apply changes")
    elif summary.dry_run:
        lines.append("No discrepancies found")
    else:
        lines.append("Synchronization complete")

    return lines
