"""
HealthMetric — one day of wearable data for one employee.

Written by integration adapters through ScoringStore.upsert_health_metrics,
which only ever fills in non-null fields: a later sync never blanks out a
value that is already present.
"""
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, DateTime, Date, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class HealthMetric(Base):
    __tablename__ = "health_metrics"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_health_metrics_employee_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)

    resting_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    avg_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    heart_rate_variability: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)

    sleep_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    deep_sleep_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    rem_sleep_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)

    steps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exercise_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    recovery_score: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="0-100")

    source: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
