"""Domain-specific exceptions for the SIMS API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. Each carries the status code it is rendered with by
``middleware.error_handler.sims_api_exception_handler``.
"""

from typing import Any

from fastapi import status


class SimsAPIError(Exception):
    """Base exception for all SIMS API errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Authentication / Authorization Errors (401, 403)
# =============================================================================


class UnauthorizedError(SimsAPIError):
    """Missing or invalid token, or the caller no longer exists."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    """Raised when a token fails signature, format or expiry checks."""

    def __init__(self) -> None:
        super().__init__("Invalid token")


class ForbiddenError(SimsAPIError):
    """Raised when the role gate or relationship gate rejects the caller."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class InvalidPayloadError(SimsAPIError):
    """Raised when a request body is missing fields or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Invalid payload")


class InvalidCredentialsError(SimsAPIError):
    """Login failure. Same message for unknown email and wrong password."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class LoginRateLimitedError(SimsAPIError):
    """Raised when a client exceeds the login attempt limit."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, retry_after: int) -> None:
        super().__init__("Too many login attempts, please try again later")
        self.retry_after = retry_after


# =============================================================================
# Store Errors (500, 409)
# =============================================================================


class StoreError(SimsAPIError):
    """Base class for failed store operations."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, {"detail": detail} if detail else None)


class InsertFailedError(StoreError):
    """Raised when an insert into the store fails."""

    def __init__(self, detail: str | None = None, message: str = "Insert failed") -> None:
        super().__init__(message, detail)


class QueryFailedError(StoreError):
    """Raised when a read from the store fails."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("Query failed", detail)


class DuplicateEvaluationError(InsertFailedError):
    """Raised when an employee already has an evaluation for the week."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, week_start: str | None = None) -> None:
        super().__init__(message="Evaluation already submitted for this week")
        if week_start:
            self.details = {"week_start": week_start}


# =============================================================================
# Configuration Errors (500)
# =============================================================================


class MissingConfigurationError(SimsAPIError):
    """Raised per request while required settings are absent."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__("Missing env vars", {"missing": list(missing)})
