import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = Config.db_config()

STORAGE_BACKEND = Config.STORAGE_BACKEND
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LEAVE_MAX_ATTEMPTS = Config.LEAVE_MAX_ATTEMPTS

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed leave types, demo accounts and their quotas on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
