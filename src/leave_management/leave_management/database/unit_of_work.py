"""Transaction boundary shared by the quota ledger and the leave lifecycle.

A unit of work commits when its `with` block exits normally and rolls back on
any exception, so a status change and its quota debit land together or not at
all.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, TypeVar

from ..core.constants import DEFAULT_MAX_ATTEMPTS
from ..core.exceptions import ConflictError
from ..leaves.memory_leave_repository import InMemoryLeaveApplicationRepository
from ..leaves.mysql_leave_repository import MySQLLeaveApplicationRepository
from ..leaves.repository import LeaveApplicationRepository
from ..quotas.memory_quota_repository import InMemoryQuotaRepository
from ..quotas.mysql_quota_repository import MySQLQuotaRepository
from ..quotas.repository import QuotaRepository
from .connection import DatabaseConnection
from .memory_store import InMemoryStore
from .mysql_base import is_lock_conflict

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnitOfWork(Protocol):
    quotas: QuotaRepository
    applications: LeaveApplicationRepository

    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        raise NotImplementedError


UnitOfWorkFactory = Callable[[], UnitOfWork]


class MySQLUnitOfWork:
    """One connection and one transaction per `with` block."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._conn = None
        self._cur = None

    def __enter__(self) -> "MySQLUnitOfWork":
        self._conn = self._conn_factory.connect()
        self._conn.start_transaction()
        self._cur = self._conn.cursor(dictionary=True)
        self.quotas = MySQLQuotaRepository(self._cur)
        self.applications = MySQLLeaveApplicationRepository(self._cur)
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        except Exception as commit_exc:
            self._conn.rollback()
            if is_lock_conflict(commit_exc):
                raise ConflictError("Database lock conflict, please try again") from commit_exc
            raise
        finally:
            self._cur.close()
            self._conn.close()

        if exc is not None and is_lock_conflict(exc):
            raise ConflictError("Database lock conflict, please try again") from exc
        return None


class InMemoryUnitOfWork:
    """Serializes on the store lock; restores the snapshot on rollback."""

    def __init__(self, store: InMemoryStore):
        self._store = store
        self._snapshot = None
        self.quotas = InMemoryQuotaRepository(store)
        self.applications = InMemoryLeaveApplicationRepository(store)

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._store.lock.acquire()
        self._snapshot = self._store.snapshot()
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        try:
            if exc_type is not None:
                self._store.restore(self._snapshot)
        finally:
            self._snapshot = None
            self._store.lock.release()
        return None


def run_in_transaction(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[UnitOfWork], T],
    *,
    attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> T:
    """Run `work` in a fresh unit of work, retrying when it loses a write race.

    Every attempt re-reads its state, so a retry sees the winner's commit.
    Raises ConflictError once `attempts` are exhausted.
    """

    attempts = max(int(attempts), 1)
    for attempt in range(1, attempts + 1):
        try:
            with uow_factory() as uow:
                return work(uow)
        except ConflictError as exc:
            if attempt == attempts:
                logger.warning("Giving up after %d conflicting attempt(s): %s", attempts, exc)
                raise ConflictError("The record is busy, please try again") from exc
            logger.warning("Write conflict on attempt %d/%d, retrying: %s", attempt, attempts, exc)

    raise AssertionError("unreachable")
