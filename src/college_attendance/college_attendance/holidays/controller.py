from __future__ import annotations

from flask import Flask, redirect, render_template, request, url_for

from ..common.guards import make_admin_required
from ..common.notify import toast_error, toast_success
from ..common.validators import require_date
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_service.is_admin)

    @app.route("/holidays", endpoint="holidays")
    @admin_required
    def holidays():
        rows = []
        try:
            rows = container.holiday_service.list_holidays()
        except Exception:
            app.logger.exception("Loading holidays failed")
            toast_error("Failed to load holidays")
        return render_template("holidays.html", holidays=rows, active_page="holidays")

    @app.route("/holidays/add", methods=["POST"], endpoint="add_holiday")
    @admin_required
    def add_holiday():
        try:
            container.holiday_service.add_holiday(
                day=require_date(request.form.get("date"), "Date"),
                reason=request.form.get("reason"),
            )
            toast_success("Holiday added successfully")
        except ValidationError as e:
            toast_error(str(e))
        except Exception as e:
            app.logger.exception("Adding holiday failed")
            toast_error(str(e))
        return redirect(url_for("holidays"))

    @app.route("/holidays/<int:holiday_id>/delete", methods=["POST"], endpoint="delete_holiday")
    @admin_required
    def delete_holiday(holiday_id: int):
        try:
            container.holiday_service.delete_holiday(holiday_id)
            toast_success("Holiday deleted successfully")
        except NotFoundError as e:
            toast_error(str(e))
        except Exception:
            app.logger.exception("Deleting holiday failed")
            toast_error("Failed to delete holiday")
        return redirect(url_for("holidays"))
