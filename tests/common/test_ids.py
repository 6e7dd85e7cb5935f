from __future__ import annotations

from src.sunday_school.sunday_school.common.ids import new_id, normalize_id, normalize_ids


def test_normalize_id():
    assert normalize_id(None) == ""
    assert normalize_id(7) == "7"
    assert normalize_id(7.0) == "7"
    assert normalize_id(" abc ") == "abc"


def test_normalize_ids_drops_blanks_and_duplicates():
    assert normalize_ids([1, "1", " 2", None, "", 3.0]) == ["1", "2", "3"]
    assert normalize_ids(None) == []


def test_new_id_is_unique():
    assert new_id() != new_id()
