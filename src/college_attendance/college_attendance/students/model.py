from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student on the roster."""

    student_id: int
    roll_number: str
    name: str
    email: Optional[str]
    class_name: str
    section: Optional[str]
    photo_url: Optional[str] = None

    @property
    def has_photo(self) -> bool:
        return bool(self.photo_url)


@dataclass(frozen=True)
class StudentForm:
    """Validated roster form input (create and edit share it)."""

    roll_number: str
    name: str
    email: Optional[str]
    class_name: str
    section: Optional[str]
