from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentForm


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[Student]:
        """All students ordered by roll number."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, form: StudentForm) -> int:
        """Insert a student. Raises ConflictError on a duplicate roll number."""

        raise NotImplementedError

    def update(self, student_id: int, form: StudentForm) -> bool:
        raise NotImplementedError

    def set_photo_url(self, student_id: int, photo_url: str) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError
