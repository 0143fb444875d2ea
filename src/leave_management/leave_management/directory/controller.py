from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import approver_required, current_role, error_response, login_required, server_error
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        try:
            s_user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("logging in")

        session.clear()
        session.permanent = bool(payload.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify({"employee_id": s_user.employee_id, "full_name": s_user.full_name, "role": s_user.role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/leave-types", methods=["GET"], endpoint="leave_types")
    @login_required
    def leave_types():
        try:
            return jsonify(
                [
                    {
                        "id": t.leave_type_id,
                        "name": t.name,
                        "default_quota_days": t.default_quota_days,
                        "description": t.description or "",
                    }
                    for t in container.directory_service.list_leave_types()
                ]
            )
        except Exception:
            return server_error("listing leave types")

    @app.route("/api/employees", methods=["POST"], endpoint="onboard_employee")
    @approver_required
    def onboard_employee():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        try:
            try:
                role = Role(payload.get("role", Role.EMPLOYEE.value))
                join_date = parse_iso_date(payload["join_date"]) if payload.get("join_date") else None
            except (ValueError, TypeError):
                raise ValidationError("Invalid role or join_date")

            employee_id = container.directory_service.onboard_employee(
                current_role=current_role(),
                full_name=payload.get("full_name", ""),
                username=payload.get("username", ""),
                password=payload.get("password", ""),
                role=role,
                department=payload.get("department"),
                position=payload.get("position"),
                join_date=join_date,
            )
            return jsonify({"employee_id": employee_id}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("onboarding the employee")
