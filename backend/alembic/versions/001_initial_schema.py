"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates employees, employee_weekly_evaluations and warning_letters with
their enumeration checks and the one-evaluation-per-week unique index.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create employees table
    op.create_table(
        "employees",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column(
            "manager_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.CheckConstraint(
            "role in ('admin','hr','supervisor','operator','observer')",
            name="employees_role_check",
        ),
    )
    op.create_index("idx_employees_email", "employees", ["email"])
    op.create_index("idx_employees_manager_id", "employees", ["manager_id"])

    # Create employee_weekly_evaluations table
    op.create_table(
        "employee_weekly_evaluations",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "employee_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("week_start", sa.Date(), nullable=False),
        sa.Column("overall_score", sa.Float(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uniq_eval_employee_week",
        "employee_weekly_evaluations",
        ["employee_id", "week_start"],
        unique=True,
    )
    op.create_index(
        "idx_evaluations_employee_created",
        "employee_weekly_evaluations",
        ["employee_id", "created_at"],
    )

    # Create warning_letters table
    op.create_table(
        "warning_letters",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "employee_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), server_default="active", nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "severity in ('low','medium','high','critical')",
            name="warning_letters_severity_check",
        ),
        sa.CheckConstraint(
            "status in ('active','resolved','revoked')",
            name="warning_letters_status_check",
        ),
    )
    op.create_index("idx_warning_letters_status", "warning_letters", ["status"])


def downgrade() -> None:
    op.drop_index("idx_warning_letters_status", table_name="warning_letters")
    op.drop_table("warning_letters")
    op.drop_index("idx_evaluations_employee_created", table_name="employee_weekly_evaluations")
    op.drop_index("uniq_eval_employee_week", table_name="employee_weekly_evaluations")
    op.drop_table("employee_weekly_evaluations")
    op.drop_index("idx_employees_manager_id", table_name="employees")
    op.drop_index("idx_employees_email", table_name="employees")
    op.drop_table("employees")
