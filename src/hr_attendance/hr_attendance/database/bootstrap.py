from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

from ..core.constants import (
    DEFAULT_AUTO_CLOCK_OUT_TIME,
    DEFAULT_COMPANY_NAME,
    DEFAULT_LATE_DEDUCTION_PER_DAY,
    DEFAULT_MAX_CLOCKING_TIME,
    DEFAULT_MAX_LATE_DAYS,
)
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Apply schema.sql (idempotent: CREATE TABLE IF NOT EXISTS). Returns statement count."""
    ensure_database_exists(conn_factory)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %d schema statements to %s", count, conn_factory.config.database)
    return count


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def seed_default_settings(conn_factory: DatabaseConnection) -> bool:
    """Insert the single settings row with company defaults when none exists.

    The late-policy leave type stays unset, so the policy is disabled until HR picks one.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*) FROM settings")
        (existing,) = cur.fetchone()
        if existing:
            return False
        cur.execute(
            """
            INSERT INTO settings
                (settings_id, max_clocking_time, auto_clock_out_time, max_late_days,
                 late_policy_deduction_per_day, company_name)
            VALUES (%s, %s, %s, %s, %s, %s)
            """,
            (
                str(uuid.uuid4()),
                DEFAULT_MAX_CLOCKING_TIME,
                DEFAULT_AUTO_CLOCK_OUT_TIME,
                DEFAULT_MAX_LATE_DAYS,
                DEFAULT_LATE_DEDUCTION_PER_DAY,
                DEFAULT_COMPANY_NAME,
            ),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Seeded default settings row")
    return True
