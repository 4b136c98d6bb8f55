"""Employee repository."""

from uuid import UUID

from sqlalchemy import select

from sims_api.models.orm.employee import EmployeeORM
from sims_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee lookups."""

    model = EmployeeORM

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email.

        Args:
            email: Normalized (lower-case) email address

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.email == email)
        )
        return result.scalar_one_or_none()

    async def get_manager_id(self, employee_id: UUID) -> tuple[bool, UUID | None]:
        """Get an employee's current manager reference.

        Args:
            employee_id: Employee UUID

        Returns:
            Tuple of (employee exists, manager id)
        """
        result = await self.session.execute(
            select(EmployeeORM.id, EmployeeORM.manager_id).where(EmployeeORM.id == employee_id)
        )
        row = result.one_or_none()
        if row is None:
            return False, None
        return True, row.manager_id
