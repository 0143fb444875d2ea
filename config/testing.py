import os

from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = Config.db_config()

# Tests run against the in-memory backend unless told otherwise.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
LOG_LEVEL = "WARNING"
LEAVE_MAX_ATTEMPTS = 3

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = True
