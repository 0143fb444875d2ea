from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class LeaveStatus(str, Enum):
    """Leave application workflow status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


APPROVER_ROLES = frozenset({Role.ADMIN, Role.HR})

# Applications that still hold their date range.
ACTIVE_STATUSES = frozenset({LeaveStatus.PENDING, LeaveStatus.APPROVED})

DECISIONS = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})
