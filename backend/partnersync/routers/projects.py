"""Project API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.deps import require_roles
from partnersync.auth.rbac import SUBMITTER_ROLES
from partnersync.database import get_db
from partnersync.models.user import User
from partnersync.schemas.base import to_json
from partnersync.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from partnersync.services import project_service

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("")
async def list_projects(db: Annotated[AsyncSession, Depends(get_db)]):
    projects = await project_service.list_projects(db)
    return {
        "success": True,
        "count": len(projects),
        "data": [to_json(ProjectResponse.model_validate(p)) for p in projects],
    }


@router.get("/with-stats")
async def list_projects_with_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    sdg_goal: str | None = Query(None, alias="sdgGoal"),
    status: str | None = Query(None),
    organization: str | None = Query(None),
    page: str | None = Query(None),
    limit: str | None = Query(None),
):
    """Paginated projects with budget statistics. Bad page/limit values fall back to defaults."""
    result = await project_service.list_projects_with_statistics(
        db,
        page=page,
        limit=limit,
        sdg_goal=sdg_goal,
        status=status,
        organization=organization,
    )
    items = result["items"]
    return {
        "success": True,
        "page": result["page"],
        "limit": result["limit"],
        "totalProjects": result["total_projects"],
        "totalPages": result["total_pages"],
        "count": len(items),
        "data": [to_json(item, exclude_none=True) for item in items],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_roles(*SUBMITTER_ROLES))],
):
    project = await project_service.create_project(db, data)
    return {"success": True, "data": to_json(ProjectResponse.model_validate(project))}


@router.get("/{project_id}/statistics")
async def get_project_statistics(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    stats = await project_service.get_project_statistics(db, project_id)
    return {"success": True, "data": to_json(stats, exclude_none=True)}


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    project = await project_service.get_project(db, project_id)
    return {"success": True, "data": to_json(ProjectResponse.model_validate(project))}


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_roles(*SUBMITTER_ROLES))],
):
    project = await project_service.update_project(db, project_id, data)
    return {"success": True, "data": to_json(ProjectResponse.model_validate(project))}


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_roles(*SUBMITTER_ROLES))],
):
    await project_service.delete_project(db, project_id)
    return {"success": True, "data": {}}
