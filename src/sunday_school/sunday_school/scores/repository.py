from __future__ import annotations

from typing import Protocol, Sequence

from .model import ScoreRecord


class ScoreRepository(Protocol):
    """Append-only log of score records (no update or delete)."""

    def add(self, record: ScoreRecord) -> str:
        raise NotImplementedError

    def list_all(self) -> Sequence[ScoreRecord]:
        """Every record in insertion order."""

        raise NotImplementedError

    def list_for_event(self, event_id: str) -> Sequence[ScoreRecord]:
        raise NotImplementedError
