"""Evaluation DTOs."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from sims_api.constants.evaluation import MAX_SCORE, MIN_SCORE


class EvaluationCreateRequest(BaseModel):
    """Weekly evaluation submission.

    The week is never part of the payload; it is derived server-side.
    """

    employee_id: UUID
    # strict: JSON numbers only, no numeric strings or booleans
    overall_score: float = Field(strict=True, ge=MIN_SCORE, le=MAX_SCORE)


class EvaluationCreatedResponse(BaseModel):
    """Evaluation submission acknowledgement."""

    success: Literal[True] = True
