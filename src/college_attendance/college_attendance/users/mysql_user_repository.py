from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate
from .model import User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        email=row["email"],
        full_name=row.get("full_name"),
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, full_name, password_hash, created_at FROM profiles WHERE id=%s",
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, full_name, password_hash, created_at FROM profiles WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_by_ids(self, user_ids: Sequence[int]) -> Sequence[User]:
        if not user_ids:
            return []

        placeholders = ",".join(["%s"] * len(user_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, email, full_name, password_hash, created_at
                FROM profiles
                WHERE id IN ({placeholders})
                ORDER BY email ASC
                """,
                tuple(int(u) for u in user_ids),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(self, *, email: str, full_name: Optional[str], password_hash: str) -> int:
        with translate_duplicate("An account with this email already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO profiles(email, full_name, password_hash) VALUES(%s,%s,%s)",
                    (email, full_name, password_hash),
                )
                return int(cur.lastrowid)
