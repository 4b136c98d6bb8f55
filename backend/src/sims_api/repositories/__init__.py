"""Repositories package."""

from sims_api.repositories.base import BaseRepository
from sims_api.repositories.employee_repository import EmployeeRepository
from sims_api.repositories.evaluation_repository import EvaluationRepository
from sims_api.repositories.warning_letter_repository import WarningLetterRepository

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "EvaluationRepository",
    "WarningLetterRepository",
]
