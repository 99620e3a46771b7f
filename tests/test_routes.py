from __future__ import annotations

import io
from datetime import date, timedelta

import pytest
from openpyxl import load_workbook

from src.college_attendance.college_attendance.core.enums import AttendanceStatus, Role

ADMIN_PAGES = [
    "/dashboard",
    "/students",
    "/manual-attendance",
    "/face-attendance",
    "/records",
    "/holidays",
    "/admin-management",
]


def _login(client, user):
    with client.session_transaction() as sess:
        sess["user_id"] = user.user_id
        sess["email"] = user.email
        sess["name"] = user.full_name or user.email


def _toasts(client):
    with client.session_transaction() as sess:
        return sess.get("_flashes", [])


@pytest.mark.parametrize("path", ADMIN_PAGES + ["/my-attendance"])
def test_protected_pages_redirect_to_auth(client, path):
    resp = client.get(path)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth")


@pytest.mark.parametrize("path", ADMIN_PAGES)
def test_non_admin_is_sent_to_my_attendance(client, repos, path):
    _login(client, repos.users.add("student@college.edu"))
    resp = client.get(path)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/my-attendance")


@pytest.mark.parametrize("path", ADMIN_PAGES)
def test_admin_pages_render(admin_client, path):
    assert admin_client.get(path).status_code == 200


def test_revoked_admin_loses_access_immediately(admin_client, repos):
    admin = repos.users.get_by_email("admin@college.edu")
    repos.roles.remove_role(admin.user_id, Role.ADMIN)

    resp = admin_client.get("/dashboard")
    assert resp.headers["Location"].endswith("/my-attendance")


def test_root_redirects_to_dashboard(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")


def test_unknown_route_renders_404(client):
    resp = client.get("/no-such-page")
    assert resp.status_code == 404
    assert b"404" in resp.data


def test_sign_in_admin_lands_on_dashboard(client, repos):
    user = repos.users.add("admin@college.edu", "admin123")
    repos.roles.add_role(user.user_id, Role.ADMIN)

    resp = client.post("/auth", data={"action": "signin", "email": "admin@college.edu", "password": "admin123"})
    assert resp.headers["Location"].endswith("/dashboard")


def test_sign_in_student_lands_on_my_attendance(client, repos):
    repos.users.add("student@college.edu", "secret123")
    resp = client.post("/auth", data={"action": "signin", "email": "student@college.edu", "password": "secret123"})
    assert resp.headers["Location"].endswith("/my-attendance")


def test_sign_in_with_wrong_password(client, repos):
    repos.users.add("student@college.edu", "secret123")
    resp = client.post("/auth", data={"action": "signin", "email": "student@college.edu", "password": "nope"})
    assert resp.status_code == 200
    assert b"Invalid email or password" in resp.data


def test_logout_clears_session(admin_client):
    resp = admin_client.post("/logout")
    assert resp.headers["Location"].endswith("/auth")
    assert _toasts(admin_client) == [("default", {"title": "Logged out", "description": "Successfully logged out"})]
    assert admin_client.get("/dashboard").headers["Location"].endswith("/auth")


def test_manual_save_through_form(admin_client, repos):
    a = repos.students.add("101", "Asha")
    b = repos.students.add("102", "Bilal")
    day = date.today() - timedelta(days=1)

    resp = admin_client.post(
        "/manual-attendance",
        data={"date": day.isoformat(), f"status_{a.student_id}": "present", f"status_{b.student_id}": "absent"},
    )

    assert resp.status_code == 302
    saved = {r.student_id: r.status for r in repos.attendance.list_for_date(day)}
    assert saved == {a.student_id: AttendanceStatus.PRESENT, b.student_id: AttendanceStatus.ABSENT}
    assert _toasts(admin_client)[0][1]["title"] == "Success"


def test_manual_form_fill_helper(admin_client, repos):
    repos.students.add("101", "Asha")
    resp = admin_client.get("/manual-attendance?fill=present")
    assert resp.data.count(b"checked") == 1
    assert b'id="status_1_present" checked' in resp.data


def test_assisted_duplicate_shows_already_recorded(admin_client, repos):
    a = repos.students.add("101", "Asha", photo_url="/photos/1.png")
    admin_client.post("/face-attendance", data={"student_id": a.student_id, "period": "2"})
    admin_client.get("/face-attendance")

    admin_client.post("/face-attendance", data={"student_id": a.student_id, "period": "2"})
    (variant, message) = _toasts(admin_client)[0]
    assert variant == "destructive"
    assert message["title"] == "Already Recorded"
    assert len(repos.attendance.records) == 1


def test_grant_admin_unknown_email(admin_client, repos):
    admin_client.post("/admin-management/grant", data={"email": "ghost@college.edu"})
    (variant, message) = _toasts(admin_client)[0]
    assert variant == "destructive"
    assert "must sign up first" in message["description"]


def test_grant_admin_twice_shows_already_admin(admin_client, repos):
    repos.users.add("faculty@college.edu")
    admin_client.post("/admin-management/grant", data={"email": "faculty@college.edu"})
    admin_client.get("/admin-management")

    admin_client.post("/admin-management/grant", data={"email": "faculty@college.edu"})
    assert _toasts(admin_client)[0][1]["title"] == "Already Admin"


def test_export_download(admin_client, repos):
    a = repos.students.add("101", "Asha", section="CSE-B")
    day = date.today()
    admin_client.post("/manual-attendance", data={"date": day.isoformat(), f"status_{a.student_id}": "present"})

    resp = admin_client.get(f"/records/export?start={day.isoformat()}&end={day.isoformat()}&section=All+Sections")

    assert resp.status_code == 200
    assert f"attendance_{day.isoformat()}_to_{day.isoformat()}.xlsx" in resp.headers["Content-Disposition"]
    rows = list(load_workbook(io.BytesIO(resp.data))["Attendance"].iter_rows(values_only=True))
    assert rows[1][1:] == ("101", "Asha", "2nd Year", "CSE-B", "PRESENT", "Manual")
    # Only the save toast is pending; the download response flashes nothing.
    assert [m["description"] for _, m in _toasts(admin_client)] == ["Attendance saved successfully"]


def test_my_attendance_page(client, repos):
    repos.students.add("101", "Asha", email="asha@college.edu")
    _login(client, repos.users.add("asha@college.edu"))

    resp = client.get("/my-attendance")
    assert resp.status_code == 200
    assert b"Total Present" in resp.data


def test_my_attendance_without_student_record(client, repos):
    _login(client, repos.users.add("visitor@college.edu"))
    resp = client.get("/my-attendance")
    assert resp.status_code == 200
    assert b"Student record not found" in resp.data
