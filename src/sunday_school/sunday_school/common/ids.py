from __future__ import annotations

import math
import uuid
from typing import Any, Iterable


def normalize_id(value: Any) -> str:
    """Canonical string form of a record id.

    Older data stored numeric ids while the current store uses opaque strings,
    so every cross-entity comparison goes through this function.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    return str(value).strip()


def normalize_ids(values: Iterable[Any] | None) -> list[str]:
    """Normalize a list of ids, dropping blanks and duplicates (first occurrence wins)."""

    out: list[str] = []
    for v in values or ():
        nid = normalize_id(v)
        if nid and nid not in out:
            out.append(nid)
    return out


def new_id() -> str:
    return uuid.uuid4().hex
