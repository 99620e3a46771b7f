from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import redirect, session, url_for


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return redirect(url_for("auth"))
        return view(*args, **kwargs)

    return wrapper


def make_admin_required(is_admin: Callable[[int], bool]):
    """Build an ``admin_required`` decorator bound to an admin lookup.

    The grant is looked up on every request so a revoked admin loses access
    immediately. Signed-in non-admins land on their personal attendance page.
    """

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return redirect(url_for("auth"))

            if not is_admin(int(session["user_id"])):
                return redirect(url_for("my_attendance"))

            return view(*args, **kwargs)

        return wrapper

    return admin_required
