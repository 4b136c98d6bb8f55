"""Department risk analytics service."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sims_api.exceptions import QueryFailedError
from sims_api.models.dto.analytics import DepartmentRiskEntry
from sims_api.repositories.warning_letter_repository import WarningLetterRepository
from sims_api.utils.secure_logging import log_error, store_error_detail

logger = logging.getLogger(__name__)


class RiskService:
    """Service for the risk dashboard."""

    def __init__(self, session: AsyncSession, debug: bool = False) -> None:
        """Initialize service with database session."""
        self.session = session
        self.debug = debug
        self.warning_repo = WarningLetterRepository(session)

    async def get_department_risk(self) -> list[DepartmentRiskEntry]:
        """Get every active warning as (employee, severity).

        Resolved and revoked warnings are excluded.

        Raises:
            QueryFailedError: If the store query fails
        """
        try:
            warnings = await self.warning_repo.get_active()
        except SQLAlchemyError as e:
            log_error(logger, "Department risk query failed", e, debug=self.debug)
            raise QueryFailedError(store_error_detail(e, self.debug)) from e

        return [DepartmentRiskEntry.model_validate(w) for w in warnings]
