"""Warning letter ORM model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from sims_api.models.orm.base import Base, UUIDMixin


class WarningLetterORM(Base, UUIDMixin):
    """Warning letter database model, created by the escalation rule."""

    __tablename__ = "warning_letters"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    severity: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "severity in ('low','medium','high','critical')",
            name="warning_letters_severity_check",
        ),
        CheckConstraint(
            "status in ('active','resolved','revoked')",
            name="warning_letters_status_check",
        ),
        Index("idx_warning_letters_status", "status"),
    )
