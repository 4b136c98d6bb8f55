"""Services package."""

from sims_api.services.auth_service import AuthService
from sims_api.services.evaluation_service import EvaluationService
from sims_api.services.risk_service import RiskService

__all__ = [
    "AuthService",
    "EvaluationService",
    "RiskService",
]
