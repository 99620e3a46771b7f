from __future__ import annotations

from flask import Flask, redirect, render_template, request, session, url_for

from ..common.guards import make_admin_required
from ..common.notify import toast, toast_error, toast_success
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_service.is_admin)

    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def auth():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            action = request.form.get("action", "signin")
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                if action == "signup":
                    container.auth_service.sign_up(
                        email=email,
                        password=password,
                        full_name=request.form.get("full_name"),
                    )
                    toast_success("Account created. You can sign in now.")
                    return redirect(url_for("auth"))

                s_user = container.auth_service.authenticate(email, password)
                session.clear()
                session["user_id"] = s_user.user_id
                session["email"] = s_user.email
                session["name"] = s_user.full_name or s_user.email
                return redirect(url_for("dashboard" if s_user.is_admin else "my_attendance"))
            except (AuthenticationError, ValidationError) as e:
                toast_error(str(e))
            except ConflictError as e:
                toast_error(str(e), title="Already Registered")
            except Exception as e:
                app.logger.exception("Authentication failed")
                toast_error(str(e) if app.config.get("DEBUG") else "Something went wrong. Please try again.")

        return render_template("auth.html")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        toast("Logged out", "Successfully logged out")
        return redirect(url_for("auth"))

    @app.route("/admin-management", endpoint="admin_management")
    @admin_required
    def admin_management():
        admins = []
        try:
            admins = container.admin_service.list_admins()
        except Exception:
            app.logger.exception("Loading admins failed")
            toast_error("Failed to load admins")
        return render_template("admin_management.html", admins=admins, active_page="admin_management")

    @app.route("/admin-management/grant", methods=["POST"], endpoint="grant_admin")
    @admin_required
    def grant_admin():
        try:
            container.admin_service.grant_admin(request.form.get("email", ""))
            toast_success("Admin role granted successfully")
        except ConflictError:
            toast_error("This user is already an admin", title="Already Admin")
        except (NotFoundError, ValidationError) as e:
            toast_error(str(e))
        except Exception as e:
            app.logger.exception("Granting admin failed")
            toast_error(str(e))
        return redirect(url_for("admin_management"))

    @app.route("/admin-management/<int:user_id>/revoke", methods=["POST"], endpoint="revoke_admin")
    @admin_required
    def revoke_admin(user_id: int):
        try:
            container.admin_service.revoke_admin(user_id)
            toast_success("Admin role removed successfully")
        except Exception:
            app.logger.exception("Revoking admin failed")
            toast_error("Failed to remove admin role")
        return redirect(url_for("admin_management"))
