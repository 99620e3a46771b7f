from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles stored in user_roles. Only admin grants exist today."""

    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Status values stored in the attendance table."""

    PRESENT = "present"
    ABSENT = "absent"
