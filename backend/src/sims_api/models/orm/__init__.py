"""SQLAlchemy ORM models package."""

from sims_api.models.orm.base import Base
from sims_api.models.orm.employee import EmployeeORM
from sims_api.models.orm.evaluation import WeeklyEvaluationORM
from sims_api.models.orm.warning_letter import WarningLetterORM

__all__ = [
    "Base",
    "EmployeeORM",
    "WeeklyEvaluationORM",
    "WarningLetterORM",
]
