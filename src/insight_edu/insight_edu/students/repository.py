from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this interface, not on a concrete database.
    """

    def list_students(self) -> Sequence[Student]:
        """All students, ordered by id."""

        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def update_attendance(self, student_id: str, percentage: int) -> bool:
        """Write the cached percentage. Returns False when no row was changed."""

        raise NotImplementedError
