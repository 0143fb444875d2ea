from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    approver_required,
    current_employee_id,
    current_role,
    error_response,
    login_required,
    server_error,
)
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import DomainError, ValidationError
from .model import LeaveApplication
from .schemas import DecideLeaveRequest, SubmitLeaveRequest


def application_json(a: LeaveApplication) -> dict:
    return {
        "id": a.application_id,
        "employee_id": a.employee_id,
        "leave_type_id": a.leave_type_id,
        "start_date": a.start_date.strftime("%Y-%m-%d"),
        "end_date": a.end_date.strftime("%Y-%m-%d"),
        "first_day_half": a.first_day_half,
        "last_day_half": a.last_day_half,
        "total_days": a.total_days,
        "reason": a.reason,
        "status": a.status.value,
        "applied_at": a.applied_at.isoformat(timespec="seconds"),
        "decided_by": a.decided_by,
        "decided_at": a.decided_at.isoformat(timespec="seconds") if a.decided_at else None,
        "comments": a.comments or "",
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave-applications", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        try:
            body = SubmitLeaveRequest.from_json(request.get_json(silent=True))
            application = container.leave_service.submit(
                employee_id=current_employee_id(),
                leave_type_id=body.leave_type_id,
                start_date=body.start_date,
                end_date=body.end_date,
                first_day_half=body.first_day_half,
                last_day_half=body.last_day_half,
                reason=body.reason,
            )
            return jsonify(application_json(application)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("submitting the leave application")

    @app.route("/api/leave-applications", methods=["GET"], endpoint="my_leave_applications")
    @login_required
    def my_leave_applications():
        try:
            applications = container.leave_service.list_for_employee(employee_id=current_employee_id())
            return jsonify([application_json(a) for a in applications])
        except Exception:
            return server_error("listing leave applications")

    @app.route("/api/leave-applications/all", methods=["GET"], endpoint="all_leave_applications")
    @approver_required
    def all_leave_applications():
        try:
            status_arg = request.args.get("status")
            employee_arg = request.args.get("employee_id")
            try:
                status = LeaveStatus(status_arg) if status_arg else None
                employee_id = int(employee_arg) if employee_arg else None
            except ValueError:
                raise ValidationError("Invalid status or employee_id filter")

            applications = container.leave_service.list_all(
                current_role=current_role(),
                status=status,
                employee_id=employee_id,
            )
            return jsonify([application_json(a) for a in applications])
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("listing all leave applications")

    @app.route("/api/leave-applications/<int:application_id>", methods=["GET"], endpoint="get_leave_application")
    @login_required
    def get_leave_application(application_id: int):
        try:
            application = container.leave_service.get(
                application_id=application_id,
                requester_id=current_employee_id(),
                current_role=current_role(),
            )
            return jsonify(application_json(application))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("loading the leave application")

    @app.route("/api/leave-applications/<int:application_id>", methods=["PATCH"], endpoint="decide_leave")
    @approver_required
    def decide_leave(application_id: int):
        try:
            body = DecideLeaveRequest.from_json(request.get_json(silent=True))
            application = container.leave_service.decide(
                current_role=current_role(),
                application_id=application_id,
                approver_id=current_employee_id(),
                decision=body.status,
                comments=body.comments,
            )
            return jsonify(application_json(application))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("deciding the leave application")

    @app.route("/api/leave-applications/<int:application_id>/cancel", methods=["PATCH"], endpoint="cancel_leave")
    @login_required
    def cancel_leave(application_id: int):
        try:
            application = container.leave_service.cancel(
                application_id=application_id,
                requester_id=current_employee_id(),
            )
            return jsonify(application_json(application))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("cancelling the leave application")
