from datetime import datetime
from sqlalchemy import Integer, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ScoringConsent(Base):
    """Per-employee consent flags. No row means full consent."""

    __tablename__ = "scoring_consent"

    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True
    )
    use_health_data: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    use_work_data: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    use_checkin_data: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allow_aggregate_contribution: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    consent_updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
