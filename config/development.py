import os

from .config import MAX_CONTENT_LENGTH, PHOTO_BASE_URL, PHOTO_STORAGE_DIR, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="root")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo roster + demo admin on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
