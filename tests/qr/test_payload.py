from __future__ import annotations

import pytest

from src.sunday_school.sunday_school.core.exceptions import ValidationError
from src.sunday_school.sunday_school.qr.payload import decode_payload, encode_payload


def test_encode_then_decode_gives_the_id():
    assert decode_payload(encode_payload("MKD-000007", "abc123")) == "abc123"


def test_payload_format():
    assert encode_payload("MKD-000007", 12) == "MKD-000007:12"


def test_decode_splits_on_first_colon_and_strips():
    assert decode_payload("MKD-000007: abc ") == "abc"
    assert decode_payload("MKD-1:a:b") == "a:b"


@pytest.mark.parametrize("text", ["", "MKD-000007", "MKD-000007:", "MKD-000007:   "])
def test_malformed_payloads(text):
    with pytest.raises(ValidationError, match="Invalid QR format"):
        decode_payload(text)
