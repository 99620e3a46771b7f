from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate
from .role_repository import RoleRepository


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_role(self, user_id: int, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM user_roles WHERE user_id=%s AND role=%s",
                (int(user_id), role.value),
            )
            return fetchone(cur) is not None

    def add_role(self, user_id: int, role: Role) -> None:
        with translate_duplicate("This user is already an admin"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO user_roles(user_id, role) VALUES(%s,%s)",
                    (int(user_id), role.value),
                )

    def remove_role(self, user_id: int, role: Role) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM user_roles WHERE user_id=%s AND role=%s",
                (int(user_id), role.value),
            )

    def list_grants(self, role: Role) -> Sequence[tuple[int, datetime | None]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, created_at FROM user_roles WHERE role=%s ORDER BY created_at ASC",
                (role.value,),
            )
            return [(int(r["user_id"]), r.get("created_at")) for r in fetchall(cur)]
