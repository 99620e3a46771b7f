"""Schema, seed and demo-account setup for the MySQL database.

Used by ``create_app`` (AUTO_INIT_DB / AUTO_SEED_DB) and by ``scripts/``.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

_PINNED_DB = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def db_config_from_settings(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "college_attendance")),
    )


@contextmanager
def _server(config: DBConfig, *, select_db: bool = True):
    params = {
        "host": config.host,
        "port": config.port,
        "user": config.user,
        "password": config.password,
        "use_pure": True,
    }
    if select_db:
        params["database"] = config.database

    conn = mysql.connector.connect(**params)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def split_sql(script: str) -> Iterator[str]:
    """Yield the statements of ``script``.

    Whole-line ``--`` comments are dropped; a ``;`` inside a quoted literal
    does not end a statement.
    """

    body = "\n".join(ln for ln in script.splitlines() if not ln.lstrip().startswith("--"))
    start = 0
    quote = None
    i = 0
    while i < len(body):
        ch = body[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = body[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    rest = body[start:].strip()
    if rest:
        yield rest


def _run_script(config: DBConfig, path: str | Path) -> int:
    # The database name comes from settings, never from the file.
    script = _PINNED_DB.sub("", Path(path).read_text(encoding="utf-8"))
    count = 0
    with _server(config) as conn:
        cur = conn.cursor()
        for stmt in split_sql(script):
            cur.execute(stmt)
            count += 1
    return count


def ensure_database_exists(db_config: dict) -> None:
    config = db_config_from_settings(db_config)
    with _server(config, select_db=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config_from_settings(db_config), schema_path)
    logger.info("Applied %s (%s statements)", schema_path, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config_from_settings(db_config), seed_path)
    logger.info("Applied %s (%s statements)", seed_path, count)


def ensure_demo_admin(db_config: dict, *, email: str = "admin@college.edu", password: str = "admin123") -> int:
    """Create the demo admin account (or reset its password) and grant it admin."""

    password_hash = generate_password_hash(password)
    with _server(db_config_from_settings(db_config)) as conn:
        cur = conn.cursor(dictionary=True)
        cur.execute(
            """
            INSERT INTO profiles (email, full_name, password_hash) VALUES (%s, %s, %s)
            ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash), id=LAST_INSERT_ID(id)
            """,
            (email, "Admin Demo", password_hash),
        )
        user_id = int(cur.lastrowid)
        cur.execute("INSERT IGNORE INTO user_roles (user_id, role) VALUES (%s, 'admin')", (user_id,))

    logger.info("Demo admin ready: %s (user_id=%s)", email, user_id)
    return user_id


def list_tables(db_config: dict) -> list[str]:
    with _server(db_config_from_settings(db_config)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
