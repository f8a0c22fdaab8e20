"""Budget statistics schemas."""
from enum import Enum

from partnersync.schemas.base import ApiModel
from partnersync.schemas.project import ProjectResponse


class WarningLevel(str, Enum):
    WARNING = "warning"
    DANGER = "danger"


class ProjectStatistics(ApiModel):
    total_spent: float
    total_people_impacted: int
    total_reports: int
    budget_remaining: float
    budget_utilization: float
    is_over_budget: bool
    warning_level: WarningLevel | None = None


class ProjectWithStatistics(ProjectResponse, ProjectStatistics):
    """Project fields merged with its derived statistics; reports omitted."""
