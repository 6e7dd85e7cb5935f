from __future__ import annotations

from typing import Any, BinaryIO

from ..children.model import Child
from ..children.service import ChildService
from ..core.exceptions import NotFoundError
from ..scores.model import ScoreRecord
from ..scores.service import ScoreService
from ..users.model import SessionUser
from . import images
from .payload import decode_payload, encode_payload


class ScannerService:
    """Turns scanned QR text (or a photo of a code) back into a child and scores it."""

    def __init__(self, children: ChildService, scores: ScoreService):
        self._children = children
        self._scores = scores

    def resolve(self, text: str) -> Child:
        child = self._children.find(decode_payload(text))
        if child is None:
            raise NotFoundError("Child not found!")
        return child

    def resolve_image(self, stream: BinaryIO) -> Child:
        return self.resolve(images.decode_image(stream))

    def record_score(self, *, user: SessionUser, event_id: Any, child_id: Any, score: Any) -> ScoreRecord:
        # Every scan appends; a second scan of the same child adds to the total.
        return self._scores.record(user=user, event_id=event_id, child_id=child_id, score=score)

    def child_qr_png(self, child_id: str) -> bytes:
        child = self._children.get(child_id)
        return images.render_png(encode_payload(child.code, child.child_id))
