"""Centralized dependency injection factories for FastAPI.

Settings, the database and the clock are owned by the application
(``app.state``) and reach handlers only through these factories, which
tests replace via ``app.dependency_overrides``.
"""

from collections.abc import Callable
from datetime import datetime

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sims_api.config import Settings
from sims_api.database import get_db
from sims_api.exceptions import MissingConfigurationError
from sims_api.security.tokens import TokenIssuer
from sims_api.services.auth_service import AuthService
from sims_api.services.evaluation_service import EvaluationService
from sims_api.services.risk_service import RiskService
from sims_api.utils.dates import utc_now


# =============================================================================
# Configuration
# =============================================================================


def get_request_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


def require_configuration(settings: Settings = Depends(get_request_settings)) -> Settings:
    """Fail fast while required configuration is missing.

    Raises:
        MissingConfigurationError: Listing every missing variable
    """
    missing = settings.missing_required
    if missing:
        raise MissingConfigurationError(missing)
    return settings


def get_token_issuer(settings: Settings = Depends(require_configuration)) -> TokenIssuer:
    """Get TokenIssuer instance."""
    return TokenIssuer.from_settings(settings)


def get_clock() -> Callable[[], datetime]:
    """Get the wall clock used to derive evaluation weeks."""
    return utc_now


# =============================================================================
# Service Factories
# =============================================================================


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db, token_issuer)


def get_evaluation_service(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
    settings: Settings = Depends(get_request_settings),
) -> EvaluationService:
    """Get EvaluationService instance."""
    return EvaluationService(db, clock=clock, debug=settings.debug)


def get_risk_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_request_settings),
) -> RiskService:
    """Get RiskService instance."""
    return RiskService(db, debug=settings.debug)
