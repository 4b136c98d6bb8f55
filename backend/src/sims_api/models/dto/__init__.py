"""Data Transfer Objects package."""

from sims_api.models.dto.analytics import DepartmentRiskEntry
from sims_api.models.dto.auth import LoginRequest, TokenResponse
from sims_api.models.dto.evaluation import EvaluationCreateRequest, EvaluationCreatedResponse

__all__ = [
    "DepartmentRiskEntry",
    "EvaluationCreateRequest",
    "EvaluationCreatedResponse",
    "LoginRequest",
    "TokenResponse",
]
