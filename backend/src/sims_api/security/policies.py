"""Relationship-based access rules."""

from uuid import UUID

from sims_api.models.domain.employee import CallerContext, EmployeeRole
from sims_api.repositories.employee_repository import EmployeeRepository

# Roles that may evaluate any employee
EVALUATE_ANYONE_ROLES = frozenset({EmployeeRole.ADMIN, EmployeeRole.HR})


async def can_evaluate(
    caller: CallerContext,
    target_employee_id: UUID,
    employees: EmployeeRepository,
) -> bool:
    """Check whether the caller may submit an evaluation for an employee.

    Admin and HR may evaluate anyone. A supervisor may evaluate only direct
    reports, i.e. employees whose manager reference is the supervisor's own
    id, read fresh from the store. Every other role is denied.

    Args:
        caller: Hydrated caller context
        target_employee_id: Employee being evaluated
        employees: Employee repository bound to the request session

    Returns:
        True if the evaluation is allowed
    """
    if caller.role in EVALUATE_ANYONE_ROLES:
        return True

    if caller.role == EmployeeRole.SUPERVISOR:
        exists, manager_id = await employees.get_manager_id(target_employee_id)
        return exists and manager_id == caller.id

    return False
