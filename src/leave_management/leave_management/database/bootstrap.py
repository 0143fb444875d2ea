from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_LEAVE_TYPES
from ..core.enums import Role
from .connection import DBConfig

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

# (full_name, username, password, role, department, position)
DEMO_EMPLOYEES = (
    ("Admin Demo", "admin", "admin123", Role.ADMIN, "Management", "Administrator"),
    ("Sarah Johnson", "hr", "hr12345", Role.HR, "Human Resources", "HR Manager"),
    ("John Smith", "employee", "employee123", Role.EMPLOYEE, "Engineering", "Software Developer"),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal splitter on ';' that ignores separators inside quoted strings.
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_sql_file(db_config, seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def ensure_default_leave_types(container: "Container") -> int:
    """Create the default leave types that are missing (matched by name)."""

    existing = {t.name for t in container.leave_types_repo.list_all()}
    created = 0
    for name, days, description in DEFAULT_LEAVE_TYPES:
        if name not in existing:
            container.leave_types_repo.create(name=name, default_quota_days=days, description=description)
            created += 1
    return created


def ensure_demo_data(container: "Container", *, year: int) -> None:
    """Default leave types, demo accounts and their quotas for `year`.

    Works against either backend; re-running it only fills what is missing.
    """

    ensure_default_leave_types(container)

    for full_name, username, password, role, department, position in DEMO_EMPLOYEES:
        employee = container.employees_repo.get_by_username(username)
        if employee:
            employee_id = employee.employee_id
        else:
            employee_id = container.employees_repo.create_employee(
                full_name=full_name,
                username=username,
                password_hash=generate_password_hash(password),
                role=role,
                department=department,
                position=position,
                join_date=date(year, 1, 1),
            )
        container.quota_service.provision(employee_id, year)

    logger.info("Demo data ready (%d accounts, year %s)", len(DEMO_EMPLOYEES), year)
