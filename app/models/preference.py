from datetime import datetime
from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class PersonalPreference(Base):
    """What "normal" looks like for one employee. One row per employee."""

    __tablename__ = "personal_preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    ideal_sleep_hours: Mapped[Decimal | None] = mapped_column(Numeric(3, 1), nullable=True)
    ideal_work_hours: Mapped[Decimal | None] = mapped_column(Numeric(3, 1), nullable=True)
    ideal_exercise_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_meeting_hours_daily: Mapped[Decimal | None] = mapped_column(Numeric(3, 1), nullable=True)

    chronotype: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment='"early_bird" | "neutral" | "night_owl"'
    )
    social_energy_type: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment='"introvert" | "ambivert" | "extrovert"'
    )
    sleep_flexibility: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment='"rigid" | "moderate" | "flexible"'
    )
    preferred_work_pattern: Mapped[str | None] = mapped_column(
        String(30), nullable=True, comment='"steady" | "burst" | "flexible"'
    )

    # Relative importance; normalized to a budget of 1.0 at scoring time.
    weight_sleep: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    weight_exercise: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    weight_workload: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    weight_meetings: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    weight_heart_metrics: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
