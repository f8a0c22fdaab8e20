"""Report schemas."""
from datetime import datetime

from pydantic import Field

from partnersync.models.report import ReportType
from partnersync.schemas.base import ApiModel


class ReportSubmit(ApiModel):
    """Loosely typed so the service can return the field-specific messages."""

    project: str | None = None
    report_type: ReportType | None = None
    amount_lkr: float | None = Field(None, alias="amountLKR")
    people_impacted: float | None = None
    description: str | None = Field(None, max_length=500)


class ReportUpdate(ApiModel):
    report_type: ReportType | None = None
    amount_lkr: float | None = Field(None, alias="amountLKR")
    people_impacted: float | None = None
    description: str | None = Field(None, min_length=1, max_length=500)


class ReportResponse(ApiModel):
    id: str
    project_id: str = Field(..., serialization_alias="project")
    reported_by: str | None = None
    report_type: ReportType
    amount_lkr: float | None = Field(None, alias="amountLKR")
    amount_usd: float | None = Field(None, alias="amountUSD")
    exchange_rate: float | None = None
    people_impacted: int | None = None
    description: str
    report_date: datetime
    created_at: datetime | None = None


class FinancialSummary(ApiModel):
    total_lkr: float = Field(0, alias="totalLKR")
    total_usd: float = Field(0, alias="totalUSD")
    report_count: int = 0


class PeopleSummary(ApiModel):
    total_people: int = 0
    report_count: int = 0


class ReportTypeCount(ApiModel):
    report_type: ReportType
    count: int


class StatsSummary(ApiModel):
    financial: FinancialSummary
    people: PeopleSummary
    reports_by_type: list[ReportTypeCount]
    projects_reported: int
    total_reports: int
