from __future__ import annotations

import io
from types import SimpleNamespace

import pytest

from src.sunday_school.sunday_school.core.exceptions import NotFoundError, ValidationError
from src.sunday_school.sunday_school.qr import images


def test_resolve_finds_child(container):
    child = container.scanner_service.resolve("MKD-000002:2")

    assert child.full_name == "Mariam"


def test_resolve_unknown_child(container):
    with pytest.raises(NotFoundError):
        container.scanner_service.resolve("MKD-000099:99")


def test_resolve_bad_format(container):
    with pytest.raises(ValidationError):
        container.scanner_service.resolve("hello")


def test_record_score_through_scanner(container, repos, khadem):
    child = container.scanner_service.resolve("MKD-000001:1")
    container.scanner_service.record_score(user=khadem, event_id="e2", child_id=child.child_id, score="3")

    assert [(r.event_id, r.child_id, r.score) for r in repos["scores"].list_all()] == [("e2", "1", 3)]


def test_child_qr_png_is_png(container):
    png = container.scanner_service.child_qr_png("1")

    assert png.startswith(b"\x89PNG\r\n\x1a\n")


def test_child_qr_png_unknown_child(container):
    with pytest.raises(NotFoundError):
        container.scanner_service.child_qr_png("nope")


def test_uploaded_photo_round_trip(container):
    pytest.importorskip("pyzbar.pyzbar")
    png = images.render_png("MKD-000003:3")

    child = container.scanner_service.resolve_image(io.BytesIO(png))

    assert child.child_id == "3"


def test_non_image_upload_is_rejected():
    pytest.importorskip("pyzbar.pyzbar")

    with pytest.raises(ValidationError):
        images.decode_image(io.BytesIO(b"not an image"))


def test_non_utf8_code_is_rejected(monkeypatch):
    zbar = pytest.importorskip("pyzbar.pyzbar")
    monkeypatch.setattr(zbar, "decode", lambda img: [SimpleNamespace(data=b"\xff\xfe\xfa")])
    png = images.render_png("anything")

    with pytest.raises(ValidationError, match="Invalid QR format"):
        images.decode_image(io.BytesIO(png))
