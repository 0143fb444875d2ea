from __future__ import annotations

from datetime import date

import pytest

from src.leave_management.leave_management.common.datetime_utils import now_local
from src.leave_management.leave_management.core.enums import Role
from src.leave_management.leave_management.core.exceptions import AuthorizationError, NotFoundError, ValidationError

YEAR = 2024


def test_demo_employees_start_with_default_balances(container, people):
    rows = container.quota_service.list_balances(current_role=Role.EMPLOYEE, current_employee_id=people["employee"])
    assert {r["leave_type"]: r["remaining_quota"] for r in rows} == {
        "Paid Leave": 20,
        "Sick Leave": 10,
        "Casual Leave": 5,
    }


def test_employee_cannot_read_someone_elses_balance(container, people):
    with pytest.raises(AuthorizationError):
        container.quota_service.list_balances(
            current_role=Role.EMPLOYEE,
            current_employee_id=people["employee"],
            employee_id=people["hr"],
        )

    rows = container.quota_service.list_balances(
        current_role=Role.HR, current_employee_id=people["hr"], employee_id=people["employee"], year=YEAR
    )
    assert len(rows) == 3


def test_provision_employee_requires_approver_and_is_idempotent(container, people):
    with pytest.raises(AuthorizationError):
        container.quota_service.provision_employee(current_role=Role.EMPLOYEE, employee_id=people["employee"], year=2025)

    created = container.quota_service.provision_employee(current_role=Role.HR, employee_id=people["employee"], year=2025)
    assert len(created) == 3
    assert container.quota_service.provision_employee(current_role=Role.HR, employee_id=people["employee"], year=2025) == []


def test_provision_unknown_employee_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.quota_service.provision(999, YEAR)


def test_set_total_quota(container, people, leave_types):
    row = container.quota_service.set_total_quota(
        current_role=Role.ADMIN,
        employee_id=people["employee"],
        leave_type_id=leave_types["Casual Leave"],
        year=YEAR,
        total_quota=8,
    )
    assert row["total_quota"] == 8
    assert container.quota_service.get_remaining(people["employee"], leave_types["Casual Leave"], YEAR) == 8

    with pytest.raises(AuthorizationError):
        container.quota_service.set_total_quota(
            current_role=Role.EMPLOYEE,
            employee_id=people["employee"],
            leave_type_id=leave_types["Casual Leave"],
            year=YEAR,
            total_quota=50,
        )


def test_set_total_quota_below_used_is_rejected(container, people, leave_types):
    sick = leave_types["Sick Leave"]
    application = container.leave_service.submit(
        employee_id=people["employee"],
        leave_type_id=sick,
        start_date=date(YEAR, 3, 1),
        end_date=date(YEAR, 3, 4),
        reason="Flu",
    )
    container.leave_service.decide(
        current_role=Role.HR, application_id=application.application_id, approver_id=people["hr"], decision="approved"
    )

    with pytest.raises(ValidationError):
        container.quota_service.set_total_quota(
            current_role=Role.HR, employee_id=people["employee"], leave_type_id=sick, year=YEAR, total_quota=3
        )


def test_utilization_report_rounds_percentage(container, people, leave_types):
    casual = leave_types["Casual Leave"]
    application = container.leave_service.submit(
        employee_id=people["employee"],
        leave_type_id=casual,
        start_date=date(YEAR, 5, 6),
        end_date=date(YEAR, 5, 7),
        last_day_half=True,
        reason="Family errand",
    )
    container.leave_service.decide(
        current_role=Role.ADMIN, application_id=application.application_id, approver_id=people["admin"], decision="approved"
    )

    report = container.quota_service.utilization_report(current_role=Role.HR, year=YEAR)
    assert [r["employee_id"] for r in report] == sorted(people.values())

    entry = next(r for r in report if r["employee_id"] == people["employee"])
    casual_row = next(u for u in entry["leave_utilization"] if u["leave_type_id"] == casual)
    # 1.5 of 5 days used -> 30%
    assert casual_row["used_quota"] == 1.5
    assert casual_row["remaining_quota"] == 3.5
    assert casual_row["utilization_percentage"] == 30

    with pytest.raises(AuthorizationError):
        container.quota_service.utilization_report(current_role=Role.EMPLOYEE, year=YEAR)


def test_onboarding_provisions_current_year(container, leave_types):
    employee_id = container.directory_service.onboard_employee(
        current_role=Role.HR,
        full_name="Jane Doe",
        username="jane",
        password="secret1",
        department="Finance",
    )
    year = now_local().year
    assert container.quota_service.get_remaining(employee_id, leave_types["Paid Leave"], year) == 20

    with pytest.raises(ValidationError):
        container.directory_service.onboard_employee(
            current_role=Role.HR, full_name="Jane Again", username="jane", password="secret1"
        )
    with pytest.raises(AuthorizationError):
        container.directory_service.onboard_employee(
            current_role=Role.HR, full_name="Root", username="root2", password="secret1", role=Role.ADMIN
        )
