from __future__ import annotations

from datetime import timedelta

import pytest

from src.college_attendance.college_attendance.core.enums import AttendanceStatus
from src.college_attendance.college_attendance.core.exceptions import NotFoundError
from src.college_attendance.college_attendance.reports.rollup import attendance_percentage


def test_dashboard_counts_only_todays_records(container, repos, today):
    a = repos.students.add("101", "Asha")
    b = repos.students.add("102", "Bilal")
    c = repos.students.add("103", "Chen")
    repos.holidays.create(day=today - timedelta(days=30), reason="Republic Day")

    svc = container.attendance_service
    svc.save_manual(
        day=today,
        statuses={a.student_id: "present", b.student_id: "present", c.student_id: "absent"},
        marked_by=1,
        today=today,
    )
    svc.save_manual(day=today - timedelta(days=1), statuses={a.student_id: "absent"}, marked_by=1, today=today)

    stats = container.rollup_service.dashboard_stats(today)

    assert stats.total_students == 3
    assert stats.present_today == 2
    assert stats.absent_today == 1
    assert stats.total_holidays == 1


def test_dashboard_with_nothing_recorded(container, today):
    stats = container.rollup_service.dashboard_stats(today)
    assert (stats.total_students, stats.present_today, stats.absent_today, stats.total_holidays) == (0, 0, 0, 0)


@pytest.mark.parametrize(
    "present,absent,expected",
    [
        (0, 0, 0.0),
        (1, 0, 100.0),
        (0, 4, 0.0),
        (2, 1, 66.7),
        (1, 2, 33.3),
        (7, 1, 87.5),
        (1, 15, 6.3),
        (15, 1, 93.8),
    ],
)
def test_attendance_percentage(present, absent, expected):
    assert attendance_percentage(present, absent) == expected


def test_student_stats_orders_and_counts(container, repos, today):
    a = repos.students.add("101", "Asha", photo_url="/photos/1.png")
    svc = container.attendance_service
    earlier = today - timedelta(days=2)
    svc.save_manual(day=earlier, statuses={a.student_id: "absent"}, marked_by=1, today=today)
    svc.mark_assisted(student_id=a.student_id, period=4, marked_by=1, today=today)
    svc.mark_assisted(student_id=a.student_id, period=2, marked_by=1, today=today)

    stats = container.rollup_service.student_stats(a.student_id)

    assert [(r.day, r.period) for r in stats.records] == [(today, 2), (today, 4), (earlier, None)]
    assert stats.total_present == 2
    assert stats.total_absent == 1
    assert stats.attendance_percentage == 66.7


def test_my_attendance_matches_student_by_email(container, repos, today):
    a = repos.students.add("101", "Asha", email="asha@college.edu")
    container.attendance_service.save_manual(day=today, statuses={a.student_id: "present"}, marked_by=1, today=today)

    student, stats = container.rollup_service.my_attendance("asha@college.edu")

    assert student.student_id == a.student_id
    assert stats.total_present == 1
    assert stats.records[0].status == AttendanceStatus.PRESENT
    assert stats.attendance_percentage == 100.0


@pytest.mark.parametrize("email", ["nobody@college.edu", None, ""])
def test_my_attendance_without_student_record(container, repos, email):
    repos.students.add("101", "Asha", email="asha@college.edu")
    with pytest.raises(NotFoundError, match="Student record not found"):
        container.rollup_service.my_attendance(email)
