from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class Session:
    """Class session. No target list (or an empty one) means the whole class."""

    session_id: str
    class_id: str
    status: SessionStatus
    target_student_ids: Optional[Tuple[str, ...]] = None
