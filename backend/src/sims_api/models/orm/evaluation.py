"""Weekly evaluation ORM model."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, Float, ForeignKey, Index, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from sims_api.models.orm.base import Base, UUIDMixin


class WeeklyEvaluationORM(Base, UUIDMixin):
    """One evaluation per employee per week. Immutable once written."""

    __tablename__ = "employee_weekly_evaluations"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    week_start: Mapped[date] = mapped_column(Date, nullable=False)
    overall_score: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "week_start", name="uniq_eval_employee_week"),
        Index("idx_evaluations_employee_created", "employee_id", "created_at"),
    )
