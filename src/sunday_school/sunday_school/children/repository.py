from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Child


class ChildRepository(Protocol):
    def get_by_id(self, child_id: str) -> Optional[Child]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Child]:
        raise NotImplementedError

    def list_codes(self) -> Sequence[str]:
        raise NotImplementedError

    def create(self, child: Child) -> str:
        raise NotImplementedError

    def update(self, child: Child) -> bool:
        raise NotImplementedError
