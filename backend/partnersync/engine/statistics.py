"""Budget statistics engine - pure, deterministic derivation from a project's reports."""
from typing import Iterable, Protocol

from partnersync.config import get_settings
from partnersync.models.report import ReportType
from partnersync.schemas.statistics import ProjectStatistics, WarningLevel


class ReportLike(Protocol):
    report_type: ReportType | str
    amount_lkr: float | None
    people_impacted: int | None


def _is_type(report: ReportLike, report_type: ReportType) -> bool:
    value = report.report_type
    return value == report_type or value == report_type.value


class StatisticsEngine:
    """Derives spend, impact and utilization figures for one project.

    No rounding happens here; the display layer formats percentages and
    currency.
    """

    def __init__(self) -> None:
        self.settings = get_settings()

    def total_spent(self, reports: Iterable[ReportLike]) -> float:
        """Σ amountLKR over financial reports; missing amounts count as 0."""
        return float(sum(r.amount_lkr or 0 for r in reports if _is_type(r, ReportType.FINANCIAL)))

    def total_people_impacted(self, reports: Iterable[ReportLike]) -> int:
        """Σ peopleImpacted over people_helped reports."""
        return int(sum(r.people_impacted or 0 for r in reports if _is_type(r, ReportType.PEOPLE_HELPED)))

    def budget_utilization(self, total_spent: float, budget: float) -> float:
        """Spend as % of budget. Uncapped; 0 when there is no budget."""
        if budget > 0:
            return total_spent / budget * 100
        return 0.0

    def warning_level(self, utilization: float) -> WarningLevel | None:
        if utilization >= self.settings.budget_danger_threshold_pct:
            return WarningLevel.DANGER
        if utilization >= self.settings.budget_warning_threshold_pct:
            return WarningLevel.WARNING
        return None

    def compute(self, budget: float | None, reports: Iterable[ReportLike]) -> ProjectStatistics:
        reports = list(reports)
        budget = budget or 0.0
        spent = self.total_spent(reports)
        utilization = self.budget_utilization(spent, budget)
        return ProjectStatistics(
            total_spent=spent,
            total_people_impacted=self.total_people_impacted(reports),
            total_reports=len(reports),
            budget_remaining=budget - spent,
            budget_utilization=utilization,
            is_over_budget=spent > budget if budget > 0 else False,
            warning_level=self.warning_level(utilization),
        )
