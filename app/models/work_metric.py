from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, DateTime, Date, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class WorkMetric(Base):
    """One day of work-system data (HR, calendar, ticketing) for one employee."""

    __tablename__ = "work_metrics"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_work_metrics_employee_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)

    hours_worked: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    overtime_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)

    meetings_attended: Mapped[int | None] = mapped_column(Integer, nullable=True)
    meeting_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    focus_time_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)

    tasks_completed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tasks_assigned: Mapped[int | None] = mapped_column(Integer, nullable=True)
    emails_sent: Mapped[int | None] = mapped_column(Integer, nullable=True)
    messages_sent: Mapped[int | None] = mapped_column(Integer, nullable=True)

    source: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
