import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    """Defaults shared by every environment; each settings module overrides what differs."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "leave_db")

    # mysql | memory
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "mysql")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Attempts for submit/decide when a concurrent write wins the race.
    LEAVE_MAX_ATTEMPTS = int(os.environ.get("LEAVE_MAX_ATTEMPTS", "3"))

    # Dev helpers
    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
