"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- employees ---
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_id", "employees", ["id"])
    op.create_index("ix_employees_organization_id", "employees", ["organization_id"])

    # --- health_metrics ---
    op.create_table(
        "health_metrics",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("resting_heart_rate", sa.Integer(), nullable=True),
        sa.Column("avg_heart_rate", sa.Integer(), nullable=True),
        sa.Column("heart_rate_variability", sa.Numeric(5, 2), nullable=True),
        sa.Column("sleep_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("deep_sleep_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("rem_sleep_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("steps", sa.Integer(), nullable=True),
        sa.Column("exercise_minutes", sa.Integer(), nullable=True),
        sa.Column("recovery_score", sa.Integer(), nullable=True),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "date", name="uq_health_metrics_employee_date"),
    )
    op.create_index("ix_health_metrics_id", "health_metrics", ["id"])
    op.create_index("ix_health_metrics_employee_id", "health_metrics", ["employee_id"])
    op.create_index("ix_health_metrics_date", "health_metrics", ["date"])

    # --- work_metrics ---
    op.create_table(
        "work_metrics",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("hours_worked", sa.Numeric(4, 2), nullable=True),
        sa.Column("overtime_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("meetings_attended", sa.Integer(), nullable=True),
        sa.Column("meeting_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("focus_time_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("tasks_completed", sa.Integer(), nullable=True),
        sa.Column("tasks_assigned", sa.Integer(), nullable=True),
        sa.Column("emails_sent", sa.Integer(), nullable=True),
        sa.Column("messages_sent", sa.Integer(), nullable=True),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "date", name="uq_work_metrics_employee_date"),
    )
    op.create_index("ix_work_metrics_id", "work_metrics", ["id"])
    op.create_index("ix_work_metrics_employee_id", "work_metrics", ["employee_id"])
    op.create_index("ix_work_metrics_date", "work_metrics", ["date"])

    # --- feeling_checkins ---
    op.create_table(
        "feeling_checkins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("overall_feeling", sa.Integer(), nullable=False),
        sa.Column("energy_level", sa.Integer(), nullable=True),
        sa.Column("stress_level", sa.Integer(), nullable=True),
        sa.Column("motivation_level", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("validated_responses", sa.Text(), nullable=True),
        sa.Column("burnout_score_at_checkin", sa.Numeric(5, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("overall_feeling BETWEEN 1 AND 5", name="ck_checkin_overall_feeling"),
    )
    op.create_index("ix_feeling_checkins_id", "feeling_checkins", ["id"])
    op.create_index("ix_feeling_checkins_employee_id", "feeling_checkins", ["employee_id"])
    op.create_index("ix_feeling_checkins_created_at", "feeling_checkins", ["created_at"])

    # --- organization_thresholds (organization_id NULL = system default) ---
    op.create_table(
        "organization_thresholds",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=True),
        sa.Column("burnout_red_threshold", sa.Integer(), nullable=True),
        sa.Column("readiness_green_threshold", sa.Integer(), nullable=True),
        sa.Column("interaction_high_threshold", sa.Integer(), nullable=True),
        sa.Column("interaction_critical_threshold", sa.Integer(), nullable=True),
        sa.Column("threshold_type", sa.String(20), nullable=True),
        sa.Column("enable_interaction_effects", sa.Boolean(), nullable=True),
        sa.Column("weekend_adjustment_enabled", sa.Boolean(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id"),
    )
    op.create_index("ix_organization_thresholds_id", "organization_thresholds", ["id"])

    # --- employee_threshold_overrides ---
    op.create_table(
        "employee_threshold_overrides",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("burnout_red_threshold", sa.Integer(), nullable=True),
        sa.Column("readiness_green_threshold", sa.Integer(), nullable=True),
        sa.Column("interaction_high_threshold", sa.Integer(), nullable=True),
        sa.Column("interaction_critical_threshold", sa.Integer(), nullable=True),
        sa.Column("override_reason", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employee_threshold_overrides_id", "employee_threshold_overrides", ["id"])
    op.create_index(
        "ix_employee_threshold_overrides_employee_id", "employee_threshold_overrides", ["employee_id"]
    )

    # --- seed system default thresholds ---
    op.execute("""
        INSERT INTO organization_thresholds (
          organization_id, burnout_red_threshold, readiness_green_threshold,
          interaction_high_threshold, interaction_critical_threshold,
          threshold_type, enable_interaction_effects, weekend_adjustment_enabled
        )
        VALUES (NULL, 70, 70, 50, 70, 'absolute', true, true)
    """)


def downgrade() -> None:
    op.drop_table("employee_threshold_overrides")
    op.drop_table("organization_thresholds")
    op.drop_table("feeling_checkins")
    op.drop_table("work_metrics")
    op.drop_table("health_metrics")
    op.drop_table("employees")
