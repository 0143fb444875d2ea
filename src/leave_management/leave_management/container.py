from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.locks import KeyedLock
from .core.constants import DEFAULT_MAX_ATTEMPTS
from .database.connection import DatabaseConnection
from .database.memory_store import InMemoryStore
from .database.unit_of_work import InMemoryUnitOfWork, MySQLUnitOfWork, UnitOfWorkFactory
from .directory.memory_directory_repository import InMemoryEmployeeRepository, InMemoryLeaveTypeRepository
from .directory.mysql_employee_repository import MySQLEmployeeRepository
from .directory.mysql_leave_type_repository import MySQLLeaveTypeRepository
from .directory.repository import EmployeeRepository, LeaveTypeRepository
from .directory.service import AuthService, DirectoryService
from .leaves.service import LeaveService
from .quotas.service import QuotaService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    leave_types_repo: LeaveTypeRepository
    uow_factory: UnitOfWorkFactory

    auth_service: AuthService
    directory_service: DirectoryService
    quota_service: QuotaService
    leave_service: LeaveService


def _wire(
    *,
    employees_repo: EmployeeRepository,
    leave_types_repo: LeaveTypeRepository,
    uow_factory: UnitOfWorkFactory,
    max_attempts: int,
) -> Container:
    quota_service = QuotaService(uow_factory, employees_repo, leave_types_repo, max_attempts=max_attempts)
    leave_service = LeaveService(
        uow_factory,
        employees_repo,
        leave_types_repo,
        locks=KeyedLock(),
        max_attempts=max_attempts,
    )
    return Container(
        employees_repo=employees_repo,
        leave_types_repo=leave_types_repo,
        uow_factory=uow_factory,
        auth_service=AuthService(employees_repo),
        directory_service=DirectoryService(employees_repo, leave_types_repo, quota_service),
        quota_service=quota_service,
        leave_service=leave_service,
    )


def build_container(*, db_config: dict, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Container:
    conn = DatabaseConnection.from_dict(db_config)
    return _wire(
        employees_repo=MySQLEmployeeRepository(conn),
        leave_types_repo=MySQLLeaveTypeRepository(conn),
        uow_factory=lambda: MySQLUnitOfWork(conn),
        max_attempts=max_attempts,
    )


def build_memory_container(
    *,
    store: Optional[InMemoryStore] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Container:
    store = store or InMemoryStore()
    return _wire(
        employees_repo=InMemoryEmployeeRepository(store),
        leave_types_repo=InMemoryLeaveTypeRepository(store),
        uow_factory=lambda: InMemoryUnitOfWork(store),
        max_attempts=max_attempts,
    )
