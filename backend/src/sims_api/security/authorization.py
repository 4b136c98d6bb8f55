"""Request authorization pipeline.

Protected endpoints depend on ``require_role``, which chains, in order:

1. configuration guard (``require_configuration``)
2. authenticate: bearer token -> employee id
3. hydrate: employee id -> current role and manager from the store
4. role gate

The first failing stage ends the request; nothing is written before all
stages pass. The relationship gate (``security.policies.can_evaluate``)
needs the request body and runs inside the evaluation service.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sims_api.database import get_db
from sims_api.dependencies import get_token_issuer
from sims_api.exceptions import ForbiddenError, InvalidTokenError, UnauthorizedError
from sims_api.models.domain.employee import CallerContext, EmployeeRole
from sims_api.repositories.employee_repository import EmployeeRepository
from sims_api.security.rate_limit import client_ip
from sims_api.security.tokens import TokenIssuer
from sims_api.utils.security_events import SecurityEventType, log_security_event

bearer_scheme = HTTPBearer(auto_error=False)


async def authenticate(
    request: Request,
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> UUID:
    """Resolve the bearer token to an employee id.

    Raises:
        UnauthorizedError: If no bearer token is present
        InvalidTokenError: If the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    try:
        return token_issuer.verify(credentials.credentials)
    except InvalidTokenError:
        log_security_event(
            SecurityEventType.TOKEN_REJECTED,
            ip_address=client_ip(request),
            success=False,
        )
        raise


async def get_current_employee(
    employee_id: Annotated[UUID, Depends(authenticate)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CallerContext:
    """Hydrate the caller's role and manager from the store.

    The token only proves identity. Role and manager are read on every
    request so changes apply immediately.

    Raises:
        UnauthorizedError: If the employee no longer exists or the lookup fails
    """
    try:
        employee = await EmployeeRepository(db).get(employee_id)
    except SQLAlchemyError as e:
        log_security_event(
            SecurityEventType.HYDRATION_FAILED,
            employee_id=employee_id,
            details={"error_type": type(e).__name__},
            success=False,
        )
        raise UnauthorizedError() from e

    if employee is None:
        log_security_event(
            SecurityEventType.HYDRATION_FAILED,
            employee_id=employee_id,
            details={"reason": "employee_not_found"},
            success=False,
        )
        raise UnauthorizedError()

    return CallerContext(id=employee.id, role=employee.role, manager_id=employee.manager_id)


def require_role(*roles: EmployeeRole) -> Callable[..., Awaitable[CallerContext]]:
    """Create a dependency that admits only callers holding one of ``roles``.

    Args:
        roles: Permitted roles for the endpoint

    Returns:
        Dependency resolving to the hydrated caller
    """
    permitted = frozenset(roles)

    async def role_gate(
        caller: Annotated[CallerContext, Depends(get_current_employee)],
    ) -> CallerContext:
        if caller.role not in permitted:
            log_security_event(
                SecurityEventType.ROLE_DENIED,
                employee_id=caller.id,
                details={"role": caller.role.value, "required": sorted(r.value for r in permitted)},
                success=False,
            )
            raise ForbiddenError()
        return caller

    return role_gate
