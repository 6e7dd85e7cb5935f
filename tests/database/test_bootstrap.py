from __future__ import annotations

from pathlib import Path

from src.sunday_school.sunday_school.database.bootstrap import iter_sql_statements

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_split_respects_quotes_and_comments():
    sql = """
    -- a comment; with a semicolon
    INSERT INTO t VALUES ('a;b', "c;d");
    UPDATE t SET x='it\\'s';
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "INSERT INTO t VALUES ('a;b', \"c;d\")",
        "UPDATE t SET x='it\\'s'",
        "SELECT 1",
    ]


def test_schema_defines_every_table():
    sql = (REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8")

    statements = list(iter_sql_statements(sql))

    created = [s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE")]
    assert created == ["users", "classes", "children", "events", "teams", "scores"]
