"""Employee domain model."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class EmployeeRole(StrEnum):
    """Employee role enum. Mirrors the employees_role_check constraint."""

    ADMIN = "admin"
    HR = "hr"
    SUPERVISOR = "supervisor"
    OPERATOR = "operator"
    OBSERVER = "observer"


class CallerContext(BaseModel):
    """Authenticated caller, hydrated from the store on every request.

    Only the employee id comes from the token. Role and manager are read
    fresh so a demotion or re-assignment takes effect on the next request.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    role: EmployeeRole
    manager_id: UUID | None = None
