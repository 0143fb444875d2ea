from __future__ import annotations

import threading
from typing import Any


class InMemoryStore:
    """Process-local tables for the in-memory backend.

    Each table is a dict of frozen records; a unit of work takes `lock`,
    snapshots the dicts and restores them on rollback.
    """

    TABLES = ("employees", "leave_types", "leave_quotas", "leave_applications")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.tables: dict[str, dict[Any, Any]] = {name: {} for name in self.TABLES}
        self._sequences: dict[str, int] = {name: 0 for name in self.TABLES}

    def next_id(self, table: str) -> int:
        with self.lock:
            self._sequences[table] += 1
            return self._sequences[table]

    def snapshot(self) -> dict[str, dict[Any, Any]]:
        with self.lock:
            return {name: dict(rows) for name, rows in self.tables.items()}

    def restore(self, snapshot: dict[str, dict[Any, Any]]) -> None:
        with self.lock:
            for name, rows in snapshot.items():
                self.tables[name] = dict(rows)
