import os

from .config import MAX_CONTENT_LENGTH, PHOTO_BASE_URL, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="test", default_database="college_attendance_test")

PHOTO_STORAGE_DIR = os.getenv("PHOTO_STORAGE_DIR", "/tmp/college-attendance-photos")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
