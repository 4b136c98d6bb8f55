"""Authentication service."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sims_api.exceptions import InvalidCredentialsError
from sims_api.models.dto.auth import TokenResponse
from sims_api.repositories.employee_repository import EmployeeRepository
from sims_api.security.password import PasswordService, get_password_service
from sims_api.security.tokens import TokenIssuer
from sims_api.utils.secure_logging import log_error
from sims_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    """Normalize an email address for lookup."""
    return str(email or "").strip().lower()


class AuthService:
    """Service for email/password login."""

    def __init__(
        self,
        session: AsyncSession,
        token_issuer: TokenIssuer,
        password_service: PasswordService | None = None,
    ) -> None:
        """Initialize service with database session and token issuer."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.token_issuer = token_issuer
        self.password_service = password_service or get_password_service()

    async def authenticate(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
    ) -> TokenResponse:
        """Authenticate with email and password.

        Unknown email, wrong password and a failed lookup all raise the
        same error so responses cannot be used to enumerate accounts.

        Args:
            email: Employee email, normalized before lookup
            password: Plain text password
            ip_address: Client IP address for security logging

        Returns:
            TokenResponse with a session token

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        email = normalize_email(email)

        try:
            employee = await self.employee_repo.get_by_email(email) if email else None
        except SQLAlchemyError as e:
            log_error(logger, "Employee lookup failed during login", e)
            employee = None

        if employee is None:
            self.password_service.burn_verification(password)
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                email=email or None,
                ip_address=ip_address,
                details={"reason": "unknown_email"},
                success=False,
            )
            raise InvalidCredentialsError()

        if not self.password_service.verify_password(password, employee.password_hash):
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                employee_id=employee.id,
                email=email,
                ip_address=ip_address,
                details={"reason": "wrong_password"},
                success=False,
            )
            raise InvalidCredentialsError()

        log_security_event(
            SecurityEventType.LOGIN_SUCCESS,
            employee_id=employee.id,
            email=email,
            ip_address=ip_address,
        )

        return TokenResponse(token=self.token_issuer.issue(employee.id))
