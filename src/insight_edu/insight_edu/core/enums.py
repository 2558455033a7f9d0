from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of a class session. Only COMPLETED sessions count."""

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AttendanceStatus(str, Enum):
    """Mark recorded for one student in one session."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class SyncOutcome(str, Enum):
    """Per-student result of a reconciliation pass."""

    UNCHANGED = "unchanged"
    UPDATED = "updated"
    WOULD_UPDATE = "would-update"
    ERROR = "error"
