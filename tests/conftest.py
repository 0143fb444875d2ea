from __future__ import annotations

import pytest

from src.leave_management.leave_management.container import build_memory_container
from src.leave_management.leave_management.database.bootstrap import ensure_demo_data

DEMO_YEAR = 2024


@pytest.fixture()
def container():
    c = build_memory_container()
    ensure_demo_data(c, year=DEMO_YEAR)
    return c


@pytest.fixture()
def people(container):
    repo = container.employees_repo
    return {name: repo.get_by_username(name).employee_id for name in ("admin", "hr", "employee")}


@pytest.fixture()
def leave_types(container):
    return {t.name: t.leave_type_id for t in container.leave_types_repo.list_all()}
