from __future__ import annotations

import logging
from typing import Optional

from werkzeug.datastructures import FileStorage

from ..common.validators import optional_text, require_non_empty
from ..core.constants import SECTIONS
from ..core.exceptions import NotFoundError, ValidationError
from ..storage.photo_storage import PhotoStorage
from .model import Student, StudentForm
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def build_student_form(
    *,
    roll_number: Optional[str],
    name: Optional[str],
    email: Optional[str],
    class_name: Optional[str],
    section: Optional[str],
) -> StudentForm:
    section = optional_text(section)
    if section is not None and section not in SECTIONS:
        raise ValidationError(f"Unknown section: {section}")

    return StudentForm(
        roll_number=require_non_empty(roll_number, "Roll number"),
        name=require_non_empty(name, "Name"),
        email=optional_text(email),
        class_name=require_non_empty(class_name, "Year"),
        section=section,
    )


def _has_upload(photo: Optional[FileStorage]) -> bool:
    return photo is not None and bool(photo.filename)


class StudentService:
    """Use case: maintain the student roster (admin)."""

    def __init__(self, students: StudentRepository, photos: PhotoStorage):
        self._students = students
        self._photos = photos

    def list_students(self) -> list[Student]:
        return list(self._students.list_all())

    def assisted_candidates(self) -> list[Student]:
        """Students eligible for camera-assisted marking (a reference photo is required)."""

        return [s for s in self._students.list_all() if s.has_photo]

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def add_student(self, form: StudentForm, photo: Optional[FileStorage] = None) -> int:
        # A rejected photo must not leave a photo-less student behind.
        if _has_upload(photo):
            self._photos.validate(photo)

        student_id = self._students.create(form)
        logger.info("Student %s added (student_id=%s)", form.roll_number, student_id)

        if _has_upload(photo):
            photo_url = self._photos.upload(student_id, photo)
            self._students.set_photo_url(student_id, photo_url)
        return student_id

    def update_student(self, student_id: int, form: StudentForm, photo: Optional[FileStorage] = None) -> None:
        student = self.get_student(student_id)

        # Upload first so a rejected photo leaves the record untouched.
        photo_url = self._photos.upload(student.student_id, photo) if _has_upload(photo) else None

        self._students.update(student.student_id, form)
        if photo_url:
            self._students.set_photo_url(student.student_id, photo_url)
        logger.info("Student %s updated (student_id=%s)", form.roll_number, student.student_id)

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete(int(student_id)):
            raise NotFoundError("Student not found")
        logger.info("Student deleted (student_id=%s)", student_id)
