"""Schema / seed helpers used by `create_app` and the scripts under `scripts/`."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

# (user_id, username, full name, password, role, class_id)
DEMO_USERS = (
    ("admin", "admin", "Admin Demo", "admin123", Role.ADMIN, None),
    ("amin-1", "amin", "Amin Demo", "amin123", Role.AMIN, None),
    ("khadem-1", "khadem", "Khadem Demo", "khadem123", Role.KHADEM, "class-1"),
)


def _connect(db_config: dict, *, with_database: bool = True):
    target = DBConfig.from_dict(db_config)
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        charset="utf8mb4",
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep the SQL files independent of the configured database name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes; `--` line comments are dropped."""

    buf: list[str] = []
    quote = ""
    escape = False
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]

    for ch in "\n".join(lines):
        if escape:
            escape = False
        elif ch == "\\" and quote:
            escape = True
        elif ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
        elif ch == ";" and not quote:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_dict(db_config).database
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, Path(schema_path))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, Path(seed_path))


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset the password of) one demo account per approved role."""

    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True)
        now = now_local()
        for user_id, username, full_name, password, role, class_id in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, password_hash=%s, role=%s, class_id=%s, is_active=1, updated_at=%s
                    WHERE username=%s
                    """,
                    (full_name, password_hash, role.value, class_id, now, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (user_id, username, full_name, password_hash, role, class_id, is_active, created_at)
                    VALUES (%s, %s, %s, %s, %s, %s, 1, %s)
                    """,
                    (user_id, username, full_name, password_hash, role.value, class_id, now),
                )
            logger.info("demo account ready: %s (%s)", username, role.value)
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
