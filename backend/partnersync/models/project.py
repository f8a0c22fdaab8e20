"""Project model."""
from datetime import date, datetime
from enum import Enum as PyEnum

from sqlalchemy import Date, DateTime, Enum, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partnersync.database import Base, enum_values, new_object_id, utcnow


class SdgGoal(str, PyEnum):
    NO_POVERTY = "No Poverty"
    ZERO_HUNGER = "Zero Hunger"
    GOOD_HEALTH = "Good Health"
    QUALITY_EDUCATION = "Quality Education"
    GENDER_EQUALITY = "Gender Equality"
    CLEAN_WATER = "Clean Water"
    CLEAN_ENERGY = "Clean Energy"
    DECENT_WORK = "Decent Work"
    INDUSTRY = "Industry"
    REDUCED_INEQUALITIES = "Reduced Inequalities"
    SUSTAINABLE_CITIES = "Sustainable Cities"
    RESPONSIBLE_CONSUMPTION = "Responsible Consumption"
    CLIMATE_ACTION = "Climate Action"
    LIFE_BELOW_WATER = "Life Below Water"
    LIFE_ON_LAND = "Life on Land"
    PEACE_AND_JUSTICE = "Peace & Justice"
    PARTNERSHIPS = "Partnerships"


class ProjectStatus(str, PyEnum):
    PROPOSED = "Proposed"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Project(Base):
    """Development project registered by a partner organization."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # Non-native enums store the value, so unknown filter strings match nothing
    sdg_goal: Mapped[SdgGoal] = mapped_column(
        Enum(SdgGoal, values_callable=enum_values, native_enum=False, length=40),
        nullable=False,
        index=True,
    )
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=ProjectStatus.PROPOSED,
        index=True,
    )
    organization: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    budget: Mapped[float | None] = mapped_column(Float, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
