"""Toast notifications on top of Flask's flash messages.

Each toast carries a short title and a description; templates render the
flashed dict as a toast and use the category as its variant.
"""

from __future__ import annotations

from flask import flash


def toast(title: str, description: str, *, variant: str = "default") -> None:
    flash({"title": title, "description": description}, variant)


def toast_success(description: str) -> None:
    toast("Success", description)


def toast_error(description: str, *, title: str = "Error") -> None:
    toast(title, description, variant="destructive")
