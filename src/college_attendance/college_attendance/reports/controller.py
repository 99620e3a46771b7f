from __future__ import annotations

from flask import Flask, redirect, render_template, request, send_file, session, url_for

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.guards import login_required, make_admin_required
from ..common.notify import toast_error
from ..core.constants import ALL_SECTIONS, SECTIONS
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .exporter import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_service.is_admin)

    def _filters():
        today = today_local().isoformat()
        start_s = request.args.get("start") or today
        end_s = request.args.get("end") or today
        section = request.args.get("section") or ALL_SECTIONS
        return parse_iso_date(start_s), parse_iso_date(end_s), section

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("dashboard"))

    @app.route("/dashboard", endpoint="dashboard")
    @admin_required
    def dashboard():
        stats = None
        try:
            stats = container.rollup_service.dashboard_stats(today_local())
        except Exception:
            app.logger.exception("Loading dashboard stats failed")
            toast_error("Failed to load dashboard")
        return render_template("dashboard.html", stats=stats, active_page="dashboard")

    @app.route("/records", endpoint="records")
    @admin_required
    def records():
        today = today_local()
        start, end, section = today, today, ALL_SECTIONS
        rows = []
        try:
            start, end, section = _filters()
            rows = container.report_service.list_records(start=start, end=end, section=section)
        except ValueError:
            toast_error("Invalid date")
        except ValidationError as e:
            toast_error(str(e))
        except Exception:
            app.logger.exception("Loading records failed")
            toast_error("Failed to load records")

        return render_template(
            "records.html",
            records=rows,
            start=start.isoformat(),
            end=end.isoformat(),
            section=section,
            sections=(ALL_SECTIONS,) + SECTIONS,
            active_page="records",
        )

    @app.route("/records/export", endpoint="export_records")
    @admin_required
    def export_records():
        try:
            start, end, section = _filters()
            export = container.report_service.export_workbook(start=start, end=end, section=section)
        except ValueError:
            toast_error("Invalid date")
            return redirect(url_for("records"))
        except ValidationError as e:
            toast_error(str(e))
            return redirect(url_for("records"))
        except Exception as e:
            app.logger.exception("Export failed")
            toast_error(str(e))
            return redirect(url_for("records"))

        app.logger.info("Exported %s attendance rows to %s", export.row_count, export.filename)
        return send_file(
            export.content,
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=export.filename,
        )

    @app.route("/my-attendance", endpoint="my_attendance")
    @login_required
    def my_attendance():
        student = None
        stats = None
        try:
            student, stats = container.rollup_service.my_attendance(session.get("email"))
        except NotFoundError as e:
            toast_error(str(e))
        except Exception:
            app.logger.exception("Loading personal attendance failed")
            toast_error("Failed to load attendance records")

        return render_template(
            "my_attendance.html",
            student=student,
            stats=stats,
            active_page="my_attendance",
        )
