"""Analytics DTOs."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from sims_api.models.domain.warning_letter import WarningSeverity


class DepartmentRiskEntry(BaseModel):
    """Active warning projected for the risk dashboard."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: UUID
    severity: WarningSeverity
