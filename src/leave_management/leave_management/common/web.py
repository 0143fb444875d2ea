from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import APPROVER_ROLES, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_BY_ERROR = (
    (InvalidTransitionError, 409),
    (ConflictError, 409),
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
    (DomainError, 400),
)


def error_response(exc: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return jsonify({"error": type(exc).__name__, "message": str(exc)}), status
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), 400


def server_error(action: str):
    logger.exception("Unexpected error while %s", action)
    return jsonify({"error": "ServerError", "message": f"Server error while {action}"}), 500


def current_employee_id() -> int:
    return int(session["employee_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return jsonify({"error": "AuthenticationError", "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def approver_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return jsonify({"error": "AuthenticationError", "message": "Please log in to continue"}), 401
        if session.get("role") not in {r.value for r in APPROVER_ROLES}:
            return jsonify({"error": "AuthorizationError", "message": "Admin or HR role required"}), 403
        return view(*args, **kwargs)

    return wrapper
