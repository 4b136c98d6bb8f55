"""Weekly evaluations router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from sims_api.dependencies import get_evaluation_service
from sims_api.models.domain.employee import CallerContext, EmployeeRole
from sims_api.models.dto.evaluation import EvaluationCreatedResponse, EvaluationCreateRequest
from sims_api.security.authorization import require_role
from sims_api.services.evaluation_service import EvaluationService
from sims_api.utils.validation import parse_json_body

router = APIRouter()

EVALUATOR_ROLES = (EmployeeRole.SUPERVISOR, EmployeeRole.HR, EmployeeRole.ADMIN)


@router.post(
    "",
    response_model=EvaluationCreatedResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": EvaluationCreateRequest.model_json_schema()}
            },
        }
    },
)
async def submit_evaluation(
    request: Request,
    caller: Annotated[CallerContext, Depends(require_role(*EVALUATOR_ROLES))],
    evaluation_service: Annotated[EvaluationService, Depends(get_evaluation_service)],
) -> EvaluationCreatedResponse:
    """Submit this week's evaluation for an employee.

    Supervisors may evaluate their direct reports only. Two or more low
    scores among the employee's last three evaluations open a warning
    letter; that side effect is not reported in the response.
    """
    payload = await parse_json_body(request, EvaluationCreateRequest)
    await evaluation_service.submit(caller, payload)
    return EvaluationCreatedResponse()
