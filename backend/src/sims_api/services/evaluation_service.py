"""Weekly evaluation submission service."""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sims_api.constants.evaluation import ESCALATION_WINDOW
from sims_api.exceptions import (
    DuplicateEvaluationError,
    ForbiddenError,
    InsertFailedError,
    QueryFailedError,
)
from sims_api.models.domain.employee import CallerContext
from sims_api.models.domain.warning_letter import WarningSeverity, WarningStatus
from sims_api.models.dto.evaluation import EvaluationCreateRequest
from sims_api.repositories.employee_repository import EmployeeRepository
from sims_api.repositories.evaluation_repository import EvaluationRepository
from sims_api.repositories.warning_letter_repository import WarningLetterRepository
from sims_api.security.policies import can_evaluate
from sims_api.services.escalation import assess_escalation
from sims_api.utils.dates import utc_now, week_start_for
from sims_api.utils.secure_logging import log_error, store_error_detail
from sims_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


# SQLSTATE unique_violation (PostgreSQL drivers)
UNIQUE_VIOLATION_SQLSTATE = "23505"
# Extended result code name (sqlite3, Python 3.11+)
SQLITE_UNIQUE_VIOLATION = "SQLITE_CONSTRAINT_UNIQUE"


def _is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an insert failed on a unique constraint.

    The only unique constraint on weekly evaluations besides the primary
    key is one evaluation per employee and week.
    """
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return getattr(orig, "sqlite_errorname", None) == SQLITE_UNIQUE_VIOLATION


class EvaluationService:
    """Service for submitting weekly evaluations and escalating low scores.

    The evaluation insert, the history read and the optional warning insert
    share the request session and are committed together, so a failure at
    any step leaves nothing behind.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = utc_now,
        debug: bool = False,
    ) -> None:
        """Initialize service with database session and clock."""
        self.session = session
        self.clock = clock
        self.debug = debug
        self.employee_repo = EmployeeRepository(session)
        self.evaluation_repo = EvaluationRepository(session)
        self.warning_repo = WarningLetterRepository(session)

    async def submit(
        self,
        caller: CallerContext,
        request: EvaluationCreateRequest,
    ) -> WarningSeverity | None:
        """Submit an evaluation for the current week.

        Args:
            caller: Hydrated caller that passed the role gate
            request: Validated submission payload

        Returns:
            Severity of the warning letter created, or None

        Raises:
            ForbiddenError: If the caller may not evaluate this employee
            DuplicateEvaluationError: If the employee is already evaluated this week
            InsertFailedError: If an insert fails
            QueryFailedError: If reading the evaluation history fails
        """
        if not await can_evaluate(caller, request.employee_id, self.employee_repo):
            log_security_event(
                SecurityEventType.RELATIONSHIP_DENIED,
                employee_id=caller.id,
                target_employee_id=request.employee_id,
                details={"role": caller.role.value},
                success=False,
            )
            raise ForbiddenError()

        now = self.clock()
        week_start = week_start_for(now)

        try:
            await self.evaluation_repo.create(
                employee_id=request.employee_id,
                week_start=week_start,
                overall_score=request.overall_score,
                created_at=now,
            )
        except IntegrityError as e:
            if _is_unique_violation(e):
                logger.info(
                    "Duplicate evaluation for employee %s in week %s",
                    request.employee_id,
                    week_start.isoformat(),
                )
                raise DuplicateEvaluationError(week_start.isoformat()) from e
            log_error(logger, "Evaluation insert failed", e, debug=self.debug)
            raise InsertFailedError(store_error_detail(e, self.debug)) from e
        except SQLAlchemyError as e:
            log_error(logger, "Evaluation insert failed", e, debug=self.debug)
            raise InsertFailedError(store_error_detail(e, self.debug)) from e

        severity = await self._escalate(request)

        await self.session.commit()
        return severity

    async def _escalate(self, request: EvaluationCreateRequest) -> WarningSeverity | None:
        """Apply the escalation rule after a new evaluation is stored."""
        try:
            recent_scores = await self.evaluation_repo.get_recent_scores(
                request.employee_id, limit=ESCALATION_WINDOW
            )
        except SQLAlchemyError as e:
            log_error(logger, "Evaluation history query failed", e, debug=self.debug)
            raise QueryFailedError(store_error_detail(e, self.debug)) from e

        severity = assess_escalation(recent_scores)
        if severity is None:
            return None

        try:
            await self.warning_repo.create(
                employee_id=request.employee_id,
                severity=severity.value,
                status=WarningStatus.ACTIVE.value,
            )
        except SQLAlchemyError as e:
            log_error(logger, "Warning letter insert failed", e, debug=self.debug)
            raise InsertFailedError(store_error_detail(e, self.debug)) from e

        logger.info(
            "Created %s warning letter for employee %s", severity.value, request.employee_id
        )
        return severity
