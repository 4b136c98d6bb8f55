"""Warning letter repository."""

from sqlalchemy import select

from sims_api.models.domain.warning_letter import WarningStatus
from sims_api.models.orm.warning_letter import WarningLetterORM
from sims_api.repositories.base import BaseRepository


class WarningLetterRepository(BaseRepository[WarningLetterORM]):
    """Repository for warning letters."""

    model = WarningLetterORM

    async def get_active(self) -> list[WarningLetterORM]:
        """Get every warning letter with status active.

        Returns:
            List of active warning letters, unordered
        """
        result = await self.session.execute(
            select(WarningLetterORM).where(WarningLetterORM.status == WarningStatus.ACTIVE.value)
        )
        return list(result.scalars().all())
