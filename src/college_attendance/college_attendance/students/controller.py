from __future__ import annotations

from flask import Flask, redirect, render_template, request, send_from_directory, url_for

from ..common.guards import make_admin_required
from ..common.notify import toast_error, toast_success
from ..core.constants import SECTIONS
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container
from .service import build_student_form


def _form_from_request():
    return build_student_form(
        roll_number=request.form.get("roll_number"),
        name=request.form.get("name"),
        email=request.form.get("email"),
        class_name=request.form.get("class"),
        section=request.form.get("section"),
    )


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_service.is_admin)

    @app.route("/students", endpoint="students")
    @admin_required
    def students():
        rows = []
        editing = None
        try:
            rows = container.student_service.list_students()
            edit_id = request.args.get("edit", "")
            if edit_id.isdigit():
                editing = container.student_service.get_student(int(edit_id))
        except NotFoundError as e:
            toast_error(str(e))
        except Exception:
            app.logger.exception("Loading students failed")
            toast_error("Failed to load students")

        return render_template(
            "students.html",
            students=rows,
            editing=editing,
            sections=SECTIONS,
            active_page="students",
        )

    @app.route("/students/add", methods=["POST"], endpoint="add_student")
    @admin_required
    def add_student():
        try:
            container.student_service.add_student(_form_from_request(), request.files.get("photo"))
            toast_success("Student added successfully")
        except (ValidationError, ConflictError) as e:
            toast_error(str(e))
        except Exception as e:
            app.logger.exception("Adding student failed")
            toast_error(str(e))
        return redirect(url_for("students"))

    @app.route("/students/<int:student_id>/edit", methods=["POST"], endpoint="edit_student")
    @admin_required
    def edit_student(student_id: int):
        try:
            container.student_service.update_student(student_id, _form_from_request(), request.files.get("photo"))
            toast_success("Student updated successfully")
        except (ValidationError, ConflictError, NotFoundError) as e:
            toast_error(str(e))
            return redirect(url_for("students", edit=student_id))
        except Exception as e:
            app.logger.exception("Updating student failed")
            toast_error(str(e))
        return redirect(url_for("students"))

    @app.route("/students/<int:student_id>/delete", methods=["POST"], endpoint="delete_student")
    @admin_required
    def delete_student(student_id: int):
        try:
            container.student_service.delete_student(student_id)
            toast_success("Student deleted successfully")
        except NotFoundError as e:
            toast_error(str(e))
        except Exception:
            app.logger.exception("Deleting student failed")
            toast_error("Failed to delete student")
        return redirect(url_for("students"))

    @app.route("/photos/<path:key>", endpoint="student_photo")
    def student_photo(key: str):
        return send_from_directory(container.photo_storage.root_dir, key)
