"""
LifeEvent — temporary circumstance that adjusts targets and weights.

Adjustments are signed fractions (-0.3 = expect 30% less). Active while
start_date <= day < end_date; end_date NULL means ongoing.
"""
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import Integer, String, Text, Numeric, DateTime, Date, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class LifeEvent(Base):
    __tablename__ = "life_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    event_label: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    sleep_adjustment: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=0)
    work_adjustment: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=0)
    exercise_adjustment: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=0)
    stress_tolerance_adjustment: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=0)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
