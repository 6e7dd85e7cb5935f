"""Text carried by a child's QR code: ``"<child code>:<child id>"``.

No checksum or versioning; any text with a non-empty id after the first colon
is accepted.
"""
from __future__ import annotations

from typing import Any

from ..common.ids import normalize_id
from ..core.exceptions import ValidationError

SEPARATOR = ":"


def encode_payload(code: str, child_id: Any) -> str:
    return f"{code}{SEPARATOR}{normalize_id(child_id)}"


def decode_payload(text: str) -> str:
    """Return the child id carried by a scanned payload."""

    if not text or SEPARATOR not in text:
        raise ValidationError("Invalid QR format")
    child_id = text.split(SEPARATOR, 1)[1].strip()
    if not child_id:
        raise ValidationError("Invalid QR format")
    return child_id
