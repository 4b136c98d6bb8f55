"""Analytics router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from sims_api.dependencies import get_risk_service
from sims_api.models.domain.employee import CallerContext, EmployeeRole
from sims_api.models.dto.analytics import DepartmentRiskEntry
from sims_api.security.authorization import require_role
from sims_api.services.risk_service import RiskService

router = APIRouter()


@router.get("/department-risk", response_model=list[DepartmentRiskEntry])
async def get_department_risk(
    current_user: Annotated[CallerContext, Depends(require_role(EmployeeRole.HR, EmployeeRole.ADMIN))],
    risk_service: Annotated[RiskService, Depends(get_risk_service)],
) -> list[DepartmentRiskEntry]:
    """List active warning letters for the risk dashboard."""
    return await risk_service.get_department_risk()
