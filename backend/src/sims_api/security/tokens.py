"""Session token issuing and verification."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from sims_api.config import Settings
from sims_api.exceptions import InvalidTokenError


class TokenIssuer:
    """Issues and verifies signed, short-lived session tokens.

    Tokens carry only the employee id. Role and manager are deliberately
    left out and re-read from the store on every request, so changing
    either never waits for a token to expire.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=1)) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        """Build an issuer from application settings."""
        if not settings.jwt_secret:
            raise ValueError("JWT_SECRET is not configured")
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(hours=settings.jwt_expiration_hours),
        )

    def issue(self, employee_id: UUID, now: datetime | None = None) -> str:
        """Create a token for an employee.

        Args:
            employee_id: Employee UUID
            now: Issue time, defaults to the current UTC time

        Returns:
            JWT token string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(employee_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> UUID:
        """Verify a token and return the employee id it was issued for.

        Args:
            token: JWT token string

        Returns:
            Employee UUID

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            raise InvalidTokenError() from e

        try:
            return UUID(str(payload["sub"]))
        except (KeyError, ValueError) as e:
            raise InvalidTokenError() from e
