"""Project registry and budget statistics service."""
import logging
import math
from collections import defaultdict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.config import get_settings
from partnersync.engine.statistics import StatisticsEngine
from partnersync.errors import NotFoundError, ValidationError, validate_object_id
from partnersync.models.project import Project
from partnersync.models.report import Report
from partnersync.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from partnersync.schemas.statistics import ProjectWithStatistics

logger = logging.getLogger(__name__)


def coerce_positive_int(value, default: int) -> int:
    """Parse a pagination parameter; anything non-numeric or < 1 means default."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


async def get_project(db: AsyncSession, project_id: str) -> Project:
    validate_object_id(project_id, "Project")
    project = await db.get(Project, project_id)
    if not project:
        raise NotFoundError("Project", project_id)
    return project


async def list_projects(db: AsyncSession) -> list[Project]:
    result = await db.execute(select(Project).order_by(Project.created_at, Project.id))
    return list(result.scalars().all())


async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
    project = Project(**data.model_dump())
    db.add(project)
    await db.flush()
    return project


async def update_project(db: AsyncSession, project_id: str, data: ProjectUpdate) -> Project:
    project = await get_project(db, project_id)
    updates = data.model_dump(exclude_unset=True)
    for field in ("title", "description", "sdg_goal", "status", "organization", "start_date"):
        if field in updates and updates[field] is None:
            raise ValidationError(f"{field} cannot be empty")
    start = updates.get("start_date", project.start_date)
    end = updates.get("end_date", project.end_date)
    if end is not None and end < start:
        raise ValidationError("Project end date cannot be earlier than the start date")
    for k, v in updates.items():
        setattr(project, k, v)
    await db.flush()
    return project


async def delete_project(db: AsyncSession, project_id: str) -> None:
    project = await get_project(db, project_id)
    await db.delete(project)
    logger.info("Deleted project %s", project_id)


async def _reports_by_project(db: AsyncSession, project_ids: list[str]) -> dict[str, list[Report]]:
    grouped: dict[str, list[Report]] = defaultdict(list)
    if not project_ids:
        return grouped
    result = await db.execute(select(Report).where(Report.project_id.in_(project_ids)))
    for report in result.scalars().all():
        grouped[report.project_id].append(report)
    return grouped


def _with_statistics(engine: StatisticsEngine, project: Project, reports: list[Report]) -> ProjectWithStatistics:
    stats = engine.compute(project.budget, reports)
    return ProjectWithStatistics(
        **ProjectResponse.model_validate(project).model_dump(),
        **stats.model_dump(),
    )


async def list_projects_with_statistics(
    db: AsyncSession,
    page=None,
    limit=None,
    sdg_goal: str | None = None,
    status: str | None = None,
    organization: str | None = None,
) -> dict:
    """
    Filter -> count -> paginate -> attach statistics.

    Filters are plain equality; a value that matches no project yields an
    empty page. Pages are taken in creation order and ``limit`` is capped at
    ``max_page_limit``.
    """
    settings = get_settings()
    page = coerce_positive_int(page, 1)
    limit = min(coerce_positive_int(limit, settings.default_page_limit), settings.max_page_limit)

    conditions = []
    if sdg_goal:
        conditions.append(Project.sdg_goal == sdg_goal)
    if status:
        conditions.append(Project.status == status)
    if organization:
        conditions.append(Project.organization == organization)

    total = (await db.execute(select(func.count(Project.id)).where(*conditions))).scalar_one()
    offset = (page - 1) * limit
    projects: list[Project] = []
    # Pages past the end skip the query, so huge offsets never reach the driver
    if offset < total:
        result = await db.execute(
            select(Project)
            .where(*conditions)
            .order_by(Project.created_at, Project.id)
            .offset(offset)
            .limit(limit)
        )
        projects = list(result.scalars().all())
    reports = await _reports_by_project(db, [p.id for p in projects])

    engine = StatisticsEngine()
    items = [_with_statistics(engine, p, reports.get(p.id, [])) for p in projects]
    return {
        "page": page,
        "limit": limit,
        "total_projects": total,
        "total_pages": math.ceil(total / limit),
        "items": items,
    }


async def get_project_statistics(db: AsyncSession, project_id: str) -> ProjectWithStatistics:
    """Statistics for one project; malformed id -> ValidationError, absent -> NotFoundError."""
    project = await get_project(db, project_id)
    reports = await _reports_by_project(db, [project.id])
    return _with_statistics(StatisticsEngine(), project, reports.get(project.id, []))
