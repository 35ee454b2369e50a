from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..core.enums import Role
from ..security.passwords import hash_password
from .connection import DBConfig

logger = logging.getLogger(__name__)

# (name, email, password, role, department, job_title)
DEMO_USERS = (
    ("System Administrator", "admin@company.com", "admin123", Role.ADMIN, "IT", None),
    ("HR Manager", "hr@company.com", "hr123", Role.HR, "Human Resources", None),
    ("John Smith", "pm@company.com", "emp123", Role.EMPLOYEE, "Engineering", "Project Manager"),
    ("Sarah Johnson", "frontend@company.com", "emp123", Role.EMPLOYEE, "Engineering", "Frontend Developer"),
    ("Mike Wilson", "backend@company.com", "emp123", Role.EMPLOYEE, "Engineering", "Backend Developer"),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=int(target.port),
        user=target.user,
        password=target.password,
        connection_timeout=int(target.connect_timeout),
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes and '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for line in sql.splitlines(keepends=True):
        if not in_single and not in_double and line.lstrip().startswith("--"):
            continue
        for ch in line:
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
            elif ch == '"' and not in_single:
                in_double = not in_double
            elif ch == ";" and not in_single and not in_double:
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue

            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(target: DBConfig) -> None:
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(target: DBConfig, *, schema_path: str | Path) -> None:
    ensure_database_exists(target)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_users(target: DBConfig) -> None:
    """Upsert the demo accounts by email (passwords are reset to the demo values)."""

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for name, email, password, role, department, job_title in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (name, email, password_hash, role, department, job_title)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), password_hash=VALUES(password_hash), role=VALUES(role),
                    department=VALUES(department), job_title=VALUES(job_title)
                """,
                (name, email, hash_password(password), role.value, department, job_title),
            )
            logger.info("Demo account ready: %s (%s)", email, role.value)
        conn.commit()
    finally:
        conn.close()


def list_tables(target: DBConfig) -> list[str]:
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
