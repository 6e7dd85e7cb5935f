"""Sequential child codes (``MKD-000001``, ``MKD-000002``, ...)."""
from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import CHILD_CODE_DIGITS, CHILD_CODE_PREFIX


def format_child_code(number: int) -> str:
    return f"{CHILD_CODE_PREFIX}-{number:0{CHILD_CODE_DIGITS}d}"


def parse_code_number(code: Optional[str]) -> Optional[int]:
    """Numeric suffix of a code, or None when the code does not follow the pattern."""

    if not code or "-" not in code:
        return None
    suffix = code.rsplit("-", 1)[1].strip()
    if not suffix.isdigit():
        return None
    return int(suffix)


def next_child_code(existing_codes: Iterable[Optional[str]]) -> str:
    """Next code after the highest existing one (max-based, gaps are not reused).

    Best effort only: two concurrent creations can compute the same code; the
    UNIQUE constraint on ``children.code`` rejects the second insert.
    """

    numbers = [n for n in (parse_code_number(c) for c in existing_codes) if n is not None]
    return format_child_code(max(numbers, default=0) + 1)
