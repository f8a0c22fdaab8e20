"""SDG target model."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partnersync.database import Base, new_object_id, utcnow


class SdgTarget(Base):
    """Target under an SDG goal, either entered locally or synced from the UN."""

    __tablename__ = "sdg_targets"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    target_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    indicator_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    benchmark: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="Goal 17")
    is_official_un: Mapped[bool] = mapped_column(Boolean, default=False)
    last_synced: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
