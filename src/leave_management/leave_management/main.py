from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import now_local
from .container import Container, build_container, build_memory_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_data, list_tables
from .directory.controller import register as register_directory
from .leaves.controller import register as register_leaves
from .quotas.controller import register as register_quotas

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _build_container(settings) -> Container:
    max_attempts = int(getattr(settings, "LEAVE_MAX_ATTEMPTS", 3))
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()

    if backend == "memory":
        logger.info("Using in-memory storage")
        return build_memory_container(max_attempts=max_attempts)

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "Using MySQL storage %s@%s:%s/%s",
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
    return build_container(db_config=db_config, max_attempts=max_attempts)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    settings = importlib.import_module(settings_module or get_settings_module())
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = _build_container(settings)
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_data(container, year=now_local().year)
    app.extensions["leave_container"] = container

    register_directory(app, container)
    register_quotas(app, container)
    register_leaves(app, container)

    return app
