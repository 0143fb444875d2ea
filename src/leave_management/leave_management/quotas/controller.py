from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import (
    approver_required,
    current_employee_id,
    current_role,
    error_response,
    login_required,
    server_error,
)
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..leaves.schemas import ProvisionQuotaRequest, SetQuotaRequest


def _optional_int_arg(name: str):
    value = request.args.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave-quotas", methods=["GET"], endpoint="leave_quotas")
    @login_required
    def leave_quotas():
        try:
            rows = container.quota_service.list_balances(
                current_role=current_role(),
                current_employee_id=current_employee_id(),
                employee_id=_optional_int_arg("employee_id"),
                year=_optional_int_arg("year"),
            )
            return jsonify(rows)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("loading leave balances")

    @app.route("/api/employees/<int:employee_id>/leave-quotas", methods=["POST"], endpoint="provision_quotas")
    @approver_required
    def provision_quotas(employee_id: int):
        try:
            body = ProvisionQuotaRequest.from_json(request.get_json(silent=True), default_year=now_local().year)
            created = container.quota_service.provision_employee(
                current_role=current_role(),
                employee_id=employee_id,
                year=body.year,
                overrides=body.overrides,
            )
            rows = container.quota_service.list_balances(
                current_role=current_role(),
                current_employee_id=current_employee_id(),
                employee_id=employee_id,
                year=body.year,
            )
            return jsonify({"created": len(created), "quotas": rows}), 201 if created else 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("provisioning leave quotas")

    @app.route(
        "/api/employees/<int:employee_id>/leave-quotas/<int:leave_type_id>",
        methods=["PUT"],
        endpoint="set_leave_quota",
    )
    @approver_required
    def set_leave_quota(employee_id: int, leave_type_id: int):
        try:
            body = SetQuotaRequest.from_json(request.get_json(silent=True))
            row = container.quota_service.set_total_quota(
                current_role=current_role(),
                employee_id=employee_id,
                leave_type_id=leave_type_id,
                year=body.year,
                total_quota=body.total_quota,
            )
            return jsonify(row)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("updating the leave quota")

    @app.route("/api/reports/leave-utilization", methods=["GET"], endpoint="leave_utilization")
    @approver_required
    def leave_utilization():
        try:
            year = _optional_int_arg("year") or now_local().year
            return jsonify(container.quota_service.utilization_report(current_role=current_role(), year=year))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("building the leave utilization report")
