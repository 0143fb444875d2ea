"""Example: drive the leave lifecycle through the service layer (no Flask).

Controllers stay thin; every rule lives in the services.
"""

from datetime import date

from src.leave_management.leave_management.container import build_memory_container
from src.leave_management.leave_management.core.enums import Role
from src.leave_management.leave_management.database.bootstrap import ensure_demo_data


def main():
    container = build_memory_container()
    ensure_demo_data(container, year=2024)

    employee = container.employees_repo.get_by_username("employee")
    hr = container.employees_repo.get_by_username("hr")
    sick = next(t for t in container.leave_types_repo.list_all() if t.name == "Sick Leave")

    application = container.leave_service.submit(
        employee_id=employee.employee_id,
        leave_type_id=sick.leave_type_id,
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 5),
        reason="Flu",
    )
    container.leave_service.decide(
        current_role=Role.HR,
        application_id=application.application_id,
        approver_id=hr.employee_id,
        decision="approved",
    )
    print(container.quota_service.get_remaining(employee.employee_id, sick.leave_type_id, 2024))


if __name__ == "__main__":
    main()
