from __future__ import annotations

from flask import Flask, redirect, render_template, request, session, url_for

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.guards import make_admin_required
from ..common.notify import toast_error, toast_success
from ..core.constants import PERIODS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_service.is_admin)

    def _selected_day(value: str | None):
        today = today_local()
        if not value:
            return today
        try:
            return parse_iso_date(value)
        except ValueError:
            toast_error("Invalid date, showing today instead")
            return today

    @app.route("/manual-attendance", methods=["GET"], endpoint="manual_attendance")
    @admin_required
    def manual_attendance():
        day = _selected_day(request.args.get("date"))
        fill = request.args.get("fill")

        students = []
        statuses = {}
        try:
            students = container.student_service.list_students()
            statuses = container.attendance_service.get_day_sheet(day)
        except Exception:
            app.logger.exception("Loading manual attendance failed")
            toast_error("Failed to load students")

        # "All Present" / "All Absent" only pre-fill the form; Save persists.
        if fill in {s.value for s in AttendanceStatus}:
            statuses = {s.student_id: AttendanceStatus(fill) for s in students}

        return render_template(
            "manual_attendance.html",
            students=students,
            statuses=statuses,
            selected_date=day.isoformat(),
            max_date=today_local().isoformat(),
            active_page="manual_attendance",
        )

    @app.route("/manual-attendance", methods=["POST"], endpoint="save_manual_attendance")
    @admin_required
    def save_manual_attendance():
        day_s = request.form.get("date", "")
        try:
            day = parse_iso_date(day_s)
            statuses = {
                int(key[len("status_"):]): value
                for key, value in request.form.items()
                if key.startswith("status_") and key[len("status_"):].isdigit()
            }
            container.attendance_service.save_manual(
                day=day,
                statuses=statuses,
                marked_by=session.get("user_id"),
            )
            toast_success("Attendance saved successfully")
        except ValueError:
            toast_error("Invalid date")
        except ValidationError as e:
            toast_error(str(e))
        except Exception as e:
            app.logger.exception("Saving manual attendance failed")
            toast_error(str(e))
        return redirect(url_for("manual_attendance", date=day_s or None))

    @app.route("/face-attendance", methods=["GET"], endpoint="face_attendance")
    @admin_required
    def face_attendance():
        candidates = []
        today_records = []
        try:
            candidates = container.student_service.assisted_candidates()
            by_id = {s.student_id: s for s in candidates}
            today_records = [
                (r, by_id.get(r.student_id))
                for r in container.attendance_service.list_for_date(today_local())
                if not r.is_manual
            ]
        except Exception:
            app.logger.exception("Loading students for assisted attendance failed")
            toast_error("Failed to load students")

        return render_template(
            "face_attendance.html",
            candidates=candidates,
            periods=PERIODS,
            today_records=today_records,
            active_page="face_attendance",
        )

    @app.route("/face-attendance", methods=["POST"], endpoint="mark_face_attendance")
    @admin_required
    def mark_face_attendance():
        try:
            student_id = int(request.form.get("student_id") or 0)
            period = int(request.form.get("period") or 0)
            if not student_id:
                raise ValidationError("Please select a student")

            container.attendance_service.mark_assisted(
                student_id=student_id,
                period=period,
                marked_by=session.get("user_id"),
            )
            toast_success(f"Attendance marked for period {period}")
        except ConflictError as e:
            toast_error(str(e), title="Already Recorded")
        except (ValidationError, NotFoundError) as e:
            toast_error(str(e))
        except ValueError:
            toast_error("Invalid student or period")
        except Exception:
            app.logger.exception("Assisted attendance failed")
            toast_error("Failed to mark attendance")
        return redirect(url_for("face_attendance"))
