"""Settings shared by every environment module.

Values come from environment variables (a local ``.env`` is loaded by
``create_app`` through python-dotenv).
"""

import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def db_config_from_env(*, default_password: str = "", default_database: str = "college_attendance") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", default_database),
    }


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


# Student photos ("student-photos" bucket) live on local disk and are served by /photos/<key>.
PHOTO_STORAGE_DIR = os.getenv("PHOTO_STORAGE_DIR", str(REPO_ROOT / "storage" / "student-photos"))
PHOTO_BASE_URL = os.getenv("PHOTO_BASE_URL", "/photos")

MAX_CONTENT_LENGTH = 5 * 1024 * 1024  # photo upload cap
