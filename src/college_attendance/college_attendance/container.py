from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.bootstrap import db_config_from_settings
from .database.connection import DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .reports.rollup import RollupService
from .reports.service import ReportService
from .storage.photo_storage import LocalPhotoStorage
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .users.mysql_role_repository import MySQLRoleRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AdminService, AuthService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    admin_service: AdminService
    student_service: StudentService
    attendance_service: AttendanceService
    holiday_service: HolidayService
    rollup_service: RollupService
    report_service: ReportService
    photo_storage: LocalPhotoStorage


def build_services(
    *,
    users_repo,
    roles_repo,
    students_repo,
    attendance_repo,
    holidays_repo,
    photo_storage: LocalPhotoStorage,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    return Container(
        auth_service=AuthService(users_repo, roles_repo),
        admin_service=AdminService(users_repo, roles_repo),
        student_service=StudentService(students_repo, photo_storage),
        attendance_service=AttendanceService(attendance_repo, students_repo),
        holiday_service=HolidayService(holidays_repo),
        rollup_service=RollupService(attendance_repo, students_repo, holidays_repo),
        report_service=ReportService(attendance_repo),
        photo_storage=photo_storage,
    )


def build_container(*, db_config: dict, photo_dir: str, photo_base_url: str) -> Container:
    conn = DatabaseConnection.get_instance(db_config_from_settings(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        photo_storage=LocalPhotoStorage(photo_dir, photo_base_url),
    )
