from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, render_template

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .attendance.controller import register as register_attendance
from .holidays.controller import register as register_holidays
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .users.controller import register as register_users

REPO_ROOT = Path(__file__).resolve().parents[3]


def _configure_logging(app: Flask, level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    ``container`` lets tests inject services wired over in-memory repositories;
    without it the MySQL-backed container is built from settings.
    """

    load_dotenv(override=False)
    app = Flask(
        __name__,
        template_folder=str(REPO_ROOT / "templates"),
    )

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 5 * 1024 * 1024))
    _configure_logging(app, getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            app.logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_admin(db_config)
            app.logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            photo_dir=str(getattr(settings, "PHOTO_STORAGE_DIR")),
            photo_base_url=str(getattr(settings, "PHOTO_BASE_URL", "/photos")),
        )

    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_holidays(app, container)
    register_reports(app, container)

    @app.errorhandler(404)
    def not_found(_error):
        return render_template("404.html"), 404

    return app
