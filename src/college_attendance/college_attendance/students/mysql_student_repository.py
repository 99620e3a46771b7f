from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate
from .model import Student, StudentForm
from .repository import StudentRepository

_COLUMNS = "id, roll_number, name, email, class, section, photo_url"
_DUPLICATE_ROLL = "A student with this roll number already exists"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        roll_number=r["roll_number"],
        name=r["name"],
        email=r.get("email"),
        class_name=r["class"],
        section=r.get("section"),
        photo_url=r.get("photo_url"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY roll_number ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE LOWER(email)=LOWER(%s) LIMIT 1", (email,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create(self, form: StudentForm) -> int:
        with translate_duplicate(_DUPLICATE_ROLL):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(roll_number, name, email, class, section)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (form.roll_number, form.name, form.email, form.class_name, form.section),
                )
                return int(cur.lastrowid)

    def update(self, student_id: int, form: StudentForm) -> bool:
        with translate_duplicate(_DUPLICATE_ROLL):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE students
                    SET roll_number=%s, name=%s, email=%s, class=%s, section=%s
                    WHERE id=%s
                    """,
                    (form.roll_number, form.name, form.email, form.class_name, form.section, int(student_id)),
                )
                return cur.rowcount > 0

    def set_photo_url(self, student_id: int, photo_url: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET photo_url=%s WHERE id=%s", (photo_url, int(student_id)))
            return cur.rowcount > 0

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
