"""Progress report service: submission, history, summary statistics."""
import logging

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.rbac import can_modify_report
from partnersync.errors import NotFoundError, PermissionDeniedError, ValidationError, validate_object_id
from partnersync.models.project import Project, ProjectStatus
from partnersync.models.report import Report, ReportType
from partnersync.models.user import User
from partnersync.schemas.report import (
    FinancialSummary,
    PeopleSummary,
    ReportSubmit,
    ReportTypeCount,
    ReportUpdate,
    StatsSummary,
)
from partnersync.services import exchange_rate

logger = logging.getLogger(__name__)

USD_UNAVAILABLE_WARNING = "USD conversion unavailable - exchange rate service is temporarily down"


def _validate_submission(data: ReportSubmit) -> None:
    if not data.project:
        raise ValidationError("Please select a project")
    if data.report_type is None:
        raise ValidationError("Please specify a report type")
    if not data.description or not data.description.strip():
        raise ValidationError("Please provide a description")
    if data.report_type == ReportType.FINANCIAL:
        if not data.amount_lkr or data.amount_lkr <= 0:
            raise ValidationError("Financial reports require a positive amount in LKR")
    if data.report_type == ReportType.PEOPLE_HELPED:
        people = data.people_impacted
        if not people or people < 1 or people != int(people):
            raise ValidationError("People helped reports require a positive whole number")


async def submit_report(db: AsyncSession, data: ReportSubmit, user: User) -> tuple[Report, str | None]:
    """
    Record a report against an in-progress project.

    Financial reports snapshot the current LKR->USD rate. If the rate service
    is down the report is still stored, without USD figures, and a warning is
    returned alongside it.
    """
    _validate_submission(data)
    validate_object_id(data.project, "Project")
    project = await db.get(Project, data.project)
    if not project:
        raise NotFoundError("Project", data.project)
    if project.status != ProjectStatus.IN_PROGRESS:
        raise ValidationError('Reports can only be submitted for projects marked "In Progress"')

    amount_usd = None
    rate = None
    warning = None
    if data.report_type == ReportType.FINANCIAL:
        try:
            rate = await exchange_rate.fetch_lkr_to_usd_rate()
            amount_usd = exchange_rate.convert_lkr_to_usd(data.amount_lkr, rate)
        except exchange_rate.ExchangeRateUnavailable:
            warning = USD_UNAVAILABLE_WARNING

    report = Report(
        project_id=project.id,
        reported_by=user.id,
        report_type=data.report_type,
        amount_lkr=data.amount_lkr,
        amount_usd=amount_usd,
        exchange_rate=rate,
        people_impacted=int(data.people_impacted) if data.people_impacted else None,
        description=data.description.strip(),
    )
    db.add(report)
    await db.flush()
    logger.info("Report %s submitted for project %s", report.id, project.id)
    return report, warning


async def list_project_reports(db: AsyncSession, project_id: str) -> list[Report]:
    """Timeline of a project's reports, most recent first."""
    validate_object_id(project_id, "Project")
    result = await db.execute(
        select(Report)
        .where(Report.project_id == project_id)
        .order_by(Report.report_date.desc())
    )
    return list(result.scalars().all())


async def _get_modifiable_report(db: AsyncSession, report_id: str, user: User, action: str) -> Report:
    validate_object_id(report_id, "Report")
    report = await db.get(Report, report_id)
    if not report:
        raise NotFoundError("Report", report_id)
    if not can_modify_report(user, report.reported_by):
        raise PermissionDeniedError(f"Not authorized to {action} this report")
    return report


async def update_report(db: AsyncSession, report_id: str, data: ReportUpdate, user: User) -> Report:
    """
    Partial update by the owner or an admin.

    A changed LKR amount on a financial report takes a fresh rate snapshot;
    if the rate service fails the previous USD figures are kept.
    """
    report = await _get_modifiable_report(db, report_id, user, "update")
    updates = data.model_dump(exclude_unset=True)

    report_type = updates.get("report_type") or report.report_type
    amount_lkr = updates.get("amount_lkr", report.amount_lkr)
    people = updates.get("people_impacted", report.people_impacted)
    if report_type == ReportType.FINANCIAL and (not amount_lkr or amount_lkr <= 0):
        raise ValidationError("Financial reports require a positive amount in LKR")
    if report_type == ReportType.PEOPLE_HELPED and (not people or people < 1 or people != int(people)):
        raise ValidationError("People helped reports require a positive whole number")

    if "amount_lkr" in updates:
        if report_type == ReportType.FINANCIAL and amount_lkr != report.amount_lkr:
            try:
                rate = await exchange_rate.fetch_lkr_to_usd_rate()
                report.exchange_rate = rate
                report.amount_usd = exchange_rate.convert_lkr_to_usd(amount_lkr, rate)
            except exchange_rate.ExchangeRateUnavailable:
                pass  # previous snapshot stays
        report.amount_lkr = amount_lkr
    if "report_type" in updates and updates["report_type"] is not None:
        report.report_type = updates["report_type"]
    if "people_impacted" in updates:
        report.people_impacted = int(people) if people else None
    if updates.get("description") is not None:
        report.description = updates["description"].strip()
    await db.flush()
    return report


async def remove_report(db: AsyncSession, report_id: str, user: User) -> None:
    report = await _get_modifiable_report(db, report_id, user, "delete")
    await db.delete(report)
    logger.info("Report %s removed by %s", report_id, user.id)


async def stats_summary(db: AsyncSession) -> StatsSummary:
    """Totals across every project."""
    financial = (
        await db.execute(
            select(
                func.coalesce(func.sum(Report.amount_lkr), 0),
                func.coalesce(func.sum(Report.amount_usd), 0),
                func.count(Report.id),
            ).where(Report.report_type == ReportType.FINANCIAL)
        )
    ).one()
    people = (
        await db.execute(
            select(
                func.coalesce(func.sum(Report.people_impacted), 0),
                func.count(Report.id),
            ).where(Report.report_type == ReportType.PEOPLE_HELPED)
        )
    ).one()
    by_type = (
        await db.execute(
            select(Report.report_type, func.count(Report.id))
            .group_by(Report.report_type)
            .order_by(Report.report_type)
        )
    ).all()
    projects_reported = (await db.execute(select(func.count(distinct(Report.project_id))))).scalar_one()
    total = (await db.execute(select(func.count(Report.id)))).scalar_one()

    return StatsSummary(
        financial=FinancialSummary(total_lkr=financial[0], total_usd=financial[1], report_count=financial[2]),
        people=PeopleSummary(total_people=people[0], report_count=people[1]),
        reports_by_type=[ReportTypeCount(report_type=t, count=c) for t, c in by_type],
        projects_reported=projects_reported,
        total_reports=total,
    )
