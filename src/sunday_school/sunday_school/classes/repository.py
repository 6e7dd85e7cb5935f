from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def create(self, school_class: SchoolClass) -> str:
        raise NotImplementedError

    def update(self, school_class: SchoolClass) -> bool:
        """Overwrite every column of an existing class."""

        raise NotImplementedError
