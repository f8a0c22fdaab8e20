"""Project schemas."""
from datetime import date, datetime

from pydantic import Field, field_validator, model_validator

from partnersync.models.project import ProjectStatus, SdgGoal
from partnersync.schemas.base import ApiModel


def _check_title(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("A project title is mandatory for registry")
    return v


def _check_budget(v: float | None) -> float | None:
    if v is not None and v < 0:
        raise ValueError("Project budget cannot be a negative value")
    return v


class ProjectCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    sdg_goal: SdgGoal
    status: ProjectStatus = ProjectStatus.PROPOSED
    organization: str = Field(..., min_length=1)
    budget: float | None = None
    start_date: date = Field(default_factory=date.today)
    end_date: date | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _check_title(v)

    @field_validator("budget")
    @classmethod
    def budget_not_negative(cls, v: float | None) -> float | None:
        return _check_budget(v)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("Project end date cannot be earlier than the start date")
        return self


class ProjectUpdate(ApiModel):
    """Partial update; date ordering is checked against the stored row."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=500)
    sdg_goal: SdgGoal | None = None
    status: ProjectStatus | None = None
    organization: str | None = Field(None, min_length=1)
    budget: float | None = None
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _check_title(v)

    @field_validator("budget")
    @classmethod
    def budget_not_negative(cls, v: float | None) -> float | None:
        return _check_budget(v)


class ProjectResponse(ApiModel):
    id: str
    title: str
    description: str
    sdg_goal: SdgGoal
    status: ProjectStatus
    organization: str
    budget: float | None = None
    start_date: date
    end_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
