"""Progress report model."""
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from partnersync.database import Base, enum_values, new_object_id, utcnow


class ReportType(str, PyEnum):
    FINANCIAL = "financial"
    PEOPLE_HELPED = "people_helped"
    MILESTONE = "milestone"
    OTHER = "other"


class Report(Base):
    """Financial, impact or milestone entry submitted against a project.

    ``amount_usd`` and ``exchange_rate`` are a snapshot taken when the LKR
    amount was recorded; they are never recomputed on read.
    """

    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    # No FK: deleting a project leaves its reports in place
    project_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    reported_by: Mapped[str | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    report_type: Mapped[ReportType] = mapped_column(
        Enum(ReportType, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=ReportType.FINANCIAL,
    )
    amount_lkr: Mapped[float | None] = mapped_column(Float, nullable=True)
    amount_usd: Mapped[float | None] = mapped_column(Float, nullable=True)
    exchange_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    people_impacted: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    report_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
