from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from .model import Team


class TeamRepository(Protocol):
    def get_by_id(self, team_id: str) -> Optional[Team]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Team]:
        """All teams in a stable order (creation order)."""

        raise NotImplementedError

    def create(self, team: Team) -> str:
        raise NotImplementedError

    def update(self, team: Team) -> bool:
        raise NotImplementedError

    def save_memberships(self, changes: Mapping[str, Sequence[str]], *, updated_at: datetime) -> None:
        """Persist new class lists for several teams as one atomic write."""

        raise NotImplementedError

    def delete(self, team_id: str) -> bool:
        raise NotImplementedError
