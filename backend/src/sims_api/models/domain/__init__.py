"""Domain models package."""

from sims_api.models.domain.employee import CallerContext, EmployeeRole
from sims_api.models.domain.warning_letter import WarningSeverity, WarningStatus

__all__ = [
    "CallerContext",
    "EmployeeRole",
    "WarningSeverity",
    "WarningStatus",
]
