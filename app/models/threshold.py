"""
Threshold configuration rows.

OrganizationThreshold with organization_id NULL is the system default and
must exist with every column populated (seeded by migration 0001).
EmployeeThresholdOverride columns may be NULL, meaning "inherit".
"""
from datetime import datetime, date
from sqlalchemy import Integer, String, Text, Boolean, DateTime, Date, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class OrganizationThreshold(Base):
    __tablename__ = "organization_thresholds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    organization_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, unique=True, comment="NULL = system default"
    )
    burnout_red_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    readiness_green_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    interaction_high_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    interaction_critical_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    threshold_type: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment='"absolute" | "percentile"'
    )
    enable_interaction_effects: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    weekend_adjustment_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class EmployeeThresholdOverride(Base):
    __tablename__ = "employee_threshold_overrides"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    burnout_red_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    readiness_green_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    interaction_high_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    interaction_critical_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    override_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True, comment="NULL = permanent")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
