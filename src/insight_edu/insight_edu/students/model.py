from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Student:
    """Domain entity: a student and the denormalized attendance cache.

    `attendance_cached` duplicates what can be recomputed from sessions and
    attendance marks; NULL in storage is kept as None here.
    """

    student_id: str
    name: str
    class_ids: Tuple[str, ...] = ()
    attendance_cached: Optional[int] = None
