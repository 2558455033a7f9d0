from __future__ import annotations

from typing import Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def list_completed_for_classes(self, class_ids: Sequence[str]) -> Sequence[Session]:
        raise NotImplementedError
