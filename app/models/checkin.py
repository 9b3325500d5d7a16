"""
FeelingCheckin: self-reported feeling entries. Append-only.

validated_responses: JSON-encoded list stored as Text, each item
  {"response": 1-5, "weight": float, "reverse_scored": bool}
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Integer, Text, Numeric, DateTime, ForeignKey, func, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class FeelingCheckin(Base):
    __tablename__ = "feeling_checkins"
    __table_args__ = (
        CheckConstraint("overall_feeling BETWEEN 1 AND 5", name="ck_checkin_overall_feeling"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    overall_feeling: Mapped[int] = mapped_column(Integer, nullable=False)
    energy_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stress_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    motivation_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    validated_responses: Mapped[str | None] = mapped_column(Text, nullable=True)
    burnout_score_at_checkin: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), nullable=True,
        comment="Algorithmic burnout score when the check-in was submitted",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
