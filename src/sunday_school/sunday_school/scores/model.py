from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class ScoreRecord:
    """One scan result. Append-only: never edited, never deleted.

    ``score`` is kept as read from the store; the aggregator coerces it.
    """

    score_id: str
    event_id: str
    child_id: str
    score: Any
    entered_by: Optional[str] = None
    entered_at: Optional[datetime] = None
