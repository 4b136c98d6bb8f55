"""Weekly evaluation repository."""

from uuid import UUID

from sqlalchemy import select

from sims_api.models.orm.evaluation import WeeklyEvaluationORM
from sims_api.repositories.base import BaseRepository


class EvaluationRepository(BaseRepository[WeeklyEvaluationORM]):
    """Repository for weekly evaluations."""

    model = WeeklyEvaluationORM

    async def get_recent_scores(self, employee_id: UUID, limit: int) -> list[float]:
        """Get an employee's most recent scores, newest first.

        Args:
            employee_id: Employee UUID
            limit: Maximum number of evaluations to return

        Returns:
            List of overall scores ordered by creation time descending
        """
        result = await self.session.execute(
            select(WeeklyEvaluationORM.overall_score)
            .where(WeeklyEvaluationORM.employee_id == employee_id)
            .order_by(WeeklyEvaluationORM.created_at.desc())
            .limit(limit)
        )
        return [float(score) for score in result.scalars().all()]
