import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = Config.db_config()

STORAGE_BACKEND = "mysql"
LOG_LEVEL = Config.LOG_LEVEL
LEAVE_MAX_ATTEMPTS = Config.LEAVE_MAX_ATTEMPTS

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
