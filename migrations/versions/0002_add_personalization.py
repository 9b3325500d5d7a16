"""add personal_preferences, life_events and scoring_consent tables

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-08

Personal baselines, temporary life-event adjustments and per-employee
consent flags. A missing scoring_consent row means full consent.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "personal_preferences",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("ideal_sleep_hours", sa.Numeric(3, 1), nullable=True),
        sa.Column("ideal_work_hours", sa.Numeric(3, 1), nullable=True),
        sa.Column("ideal_exercise_minutes", sa.Integer(), nullable=True),
        sa.Column("max_meeting_hours_daily", sa.Numeric(3, 1), nullable=True),
        sa.Column("chronotype", sa.String(20), nullable=True),
        sa.Column("social_energy_type", sa.String(20), nullable=True),
        sa.Column("sleep_flexibility", sa.String(20), nullable=True),
        sa.Column("preferred_work_pattern", sa.String(30), nullable=True),
        sa.Column("weight_sleep", sa.Numeric(4, 2), nullable=True),
        sa.Column("weight_exercise", sa.Numeric(4, 2), nullable=True),
        sa.Column("weight_workload", sa.Numeric(4, 2), nullable=True),
        sa.Column("weight_meetings", sa.Numeric(4, 2), nullable=True),
        sa.Column("weight_heart_metrics", sa.Numeric(4, 2), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("employee_id", name="uq_personal_preferences_employee"),
    )

    op.create_table(
        "life_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("event_label", sa.String(100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("sleep_adjustment", sa.Numeric(4, 2), nullable=False, server_default="0"),
        sa.Column("work_adjustment", sa.Numeric(4, 2), nullable=False, server_default="0"),
        sa.Column("exercise_adjustment", sa.Numeric(4, 2), nullable=False, server_default="0"),
        sa.Column("stress_tolerance_adjustment", sa.Numeric(4, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_life_events_employee_id", "life_events", ["employee_id"])

    op.create_table(
        "scoring_consent",
        sa.Column(
            "employee_id", sa.Integer(),
            sa.ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("use_health_data", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("use_work_data", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("use_checkin_data", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("allow_aggregate_contribution", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("consent_updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("scoring_consent")
    op.drop_index("ix_life_events_employee_id", table_name="life_events")
    op.drop_table("life_events")
    op.drop_table("personal_preferences")
