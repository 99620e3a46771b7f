from __future__ import annotations

import io
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.college_attendance.college_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from src.college_attendance.college_attendance.container import build_services
from src.college_attendance.college_attendance.core.enums import Role
from src.college_attendance.college_attendance.core.exceptions import ConflictError
from src.college_attendance.college_attendance.holidays.model import Holiday
from src.college_attendance.college_attendance.main import create_app
from src.college_attendance.college_attendance.storage.photo_storage import LocalPhotoStorage
from src.college_attendance.college_attendance.students.model import Student
from src.college_attendance.college_attendance.users.model import User

TODAY = date(2026, 3, 10)


class FakeUsersRepo:
    def __init__(self):
        self._next_id = 1
        self.users: dict[int, User] = {}

    def add(self, email: str, password: str = "secret123", full_name: Optional[str] = None) -> User:
        return self.users[self.create_user(email=email, full_name=full_name, password_hash=generate_password_hash(password))]

    def get_by_id(self, user_id):
        return self.users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def list_by_ids(self, user_ids):
        return [self.users[i] for i in user_ids if i in self.users]

    def create_user(self, *, email, full_name, password_hash):
        if self.get_by_email(email):
            raise ConflictError("An account with this email already exists")
        uid = self._next_id
        self._next_id += 1
        self.users[uid] = User(user_id=uid, email=email, full_name=full_name, password_hash=password_hash)
        return uid


class FakeRolesRepo:
    def __init__(self):
        self.grants: dict[tuple[int, Role], datetime] = {}

    def has_role(self, user_id, role):
        return (int(user_id), role) in self.grants

    def add_role(self, user_id, role):
        if (int(user_id), role) in self.grants:
            raise ConflictError("This user is already an admin")
        self.grants[(int(user_id), role)] = datetime(2026, 1, 1, 9, 0, 0)

    def remove_role(self, user_id, role):
        self.grants.pop((int(user_id), role), None)

    def list_grants(self, role):
        return [(uid, at) for (uid, r), at in self.grants.items() if r == role]


class FakeStudentsRepo:
    def __init__(self):
        self._next_id = 1
        self.students: dict[int, Student] = {}

    def add(self, roll_number, name, *, class_name="2nd Year", section="CSE-A", email=None, photo_url=None) -> Student:
        sid = self._next_id
        self._next_id += 1
        self.students[sid] = Student(
            student_id=sid,
            roll_number=roll_number,
            name=name,
            email=email,
            class_name=class_name,
            section=section,
            photo_url=photo_url,
        )
        return self.students[sid]

    def list_all(self):
        return sorted(self.students.values(), key=lambda s: s.roll_number)

    def get_by_id(self, student_id):
        return self.students.get(int(student_id))

    def get_by_email(self, email):
        return next((s for s in self.students.values() if s.email == email), None)

    def count(self):
        return len(self.students)

    def _check_roll(self, roll_number, student_id=None):
        for s in self.students.values():
            if s.roll_number == roll_number and s.student_id != student_id:
                raise ConflictError("A student with this roll number already exists")

    def create(self, form):
        self._check_roll(form.roll_number)
        s = self.add(form.roll_number, form.name, class_name=form.class_name, section=form.section, email=form.email)
        return s.student_id

    def update(self, student_id, form):
        current = self.students.get(int(student_id))
        if not current:
            return False
        self._check_roll(form.roll_number, current.student_id)
        self.students[current.student_id] = Student(
            student_id=current.student_id,
            roll_number=form.roll_number,
            name=form.name,
            email=form.email,
            class_name=form.class_name,
            section=form.section,
            photo_url=current.photo_url,
        )
        return True

    def set_photo_url(self, student_id, photo_url):
        current = self.students.get(int(student_id))
        if not current:
            return False
        self.students[current.student_id] = replace(current, photo_url=photo_url)
        return True

    def delete(self, student_id):
        return self.students.pop(int(student_id), None) is not None


class FakeAttendanceRepo:
    """In-memory attendance table keyed like the MySQL unique index."""

    def __init__(self, students: FakeStudentsRepo):
        self._students = students
        self._next_id = 1
        self.records: list[AttendanceRecord] = []
        self.fail_next_replace = False

    def _key(self, student_id, day, period):
        return (student_id, day, period or 0)

    def _insert(self, records, *, student_id, day, status, is_manual, period, marked_by):
        key = self._key(student_id, day, period)
        if any(self._key(r.student_id, r.day, r.period) == key for r in records):
            raise ConflictError("Attendance already recorded")
        rec = AttendanceRecord(
            attendance_id=self._next_id,
            student_id=student_id,
            day=day,
            status=status,
            is_manual=is_manual,
            period=period,
            marked_by=marked_by,
        )
        self._next_id += 1
        records.append(rec)
        return rec.attendance_id

    def list_for_date(self, day):
        return [r for r in self.records if r.day == day]

    def replace_for_date(self, *, day, entries, marked_by):
        # Work on a copy and swap it in only when every insert succeeded.
        staged = [r for r in self.records if r.day != day]
        if self.fail_next_replace:
            self.fail_next_replace = False
            raise RuntimeError("insert failed")
        for e in entries:
            self._insert(
                staged,
                student_id=e.student_id,
                day=day,
                status=e.status,
                is_manual=True,
                period=None,
                marked_by=marked_by,
            )
        self.records = staged
        return len(entries)

    def create(self, *, student_id, day, status, is_manual, period=None, marked_by=None):
        return self._insert(
            self.records,
            student_id=student_id,
            day=day,
            status=status,
            is_manual=is_manual,
            period=period,
            marked_by=marked_by,
        )

    def list_for_student(self, student_id):
        rows = [r for r in self.records if r.student_id == int(student_id)]
        rows.sort(key=lambda r: r.period or 0)
        rows.sort(key=lambda r: r.day, reverse=True)
        return rows

    def get_report_rows(self, *, start_date, end_date):
        out = []
        for r in self.records:
            if not (start_date <= r.day <= end_date):
                continue
            s = self._students.get_by_id(r.student_id)
            if not s:
                continue
            out.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    day=r.day,
                    status=r.status,
                    is_manual=r.is_manual,
                    roll_number=s.roll_number,
                    name=s.name,
                    class_name=s.class_name,
                    section=s.section,
                    period=r.period,
                )
            )
        out.sort(key=lambda row: row.roll_number)
        out.sort(key=lambda row: row.day, reverse=True)
        return out


class FakeHolidaysRepo:
    def __init__(self):
        self._next_id = 1
        self.holidays: dict[int, Holiday] = {}

    def list_all(self):
        return sorted(self.holidays.values(), key=lambda h: h.day, reverse=True)

    def count(self):
        return len(self.holidays)

    def create(self, *, day, reason):
        hid = self._next_id
        self._next_id += 1
        self.holidays[hid] = Holiday(holiday_id=hid, day=day, reason=reason)
        return hid

    def delete(self, holiday_id):
        return self.holidays.pop(int(holiday_id), None) is not None


class Repos:
    def __init__(self, photo_dir: str):
        self.users = FakeUsersRepo()
        self.roles = FakeRolesRepo()
        self.students = FakeStudentsRepo()
        self.attendance = FakeAttendanceRepo(self.students)
        self.holidays = FakeHolidaysRepo()
        self.photos = LocalPhotoStorage(photo_dir, "/photos")


@pytest.fixture
def png_bytes() -> bytes:
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 10, 10)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def repos(tmp_path):
    return Repos(str(tmp_path / "photos"))


@pytest.fixture
def container(repos):
    return build_services(
        users_repo=repos.users,
        roles_repo=repos.roles,
        students_repo=repos.students,
        attendance_repo=repos.attendance,
        holidays_repo=repos.holidays,
        photo_storage=repos.photos,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client, repos):
    admin = repos.users.add("admin@college.edu", "admin123", "Admin")
    repos.roles.add_role(admin.user_id, Role.ADMIN)
    with client.session_transaction() as sess:
        sess["user_id"] = admin.user_id
        sess["email"] = admin.email
        sess["name"] = admin.full_name
    return client
