"""Report API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.deps import get_current_user, require_roles
from partnersync.auth.rbac import SUBMITTER_ROLES
from partnersync.database import get_db
from partnersync.models.user import User
from partnersync.schemas.base import to_json
from partnersync.schemas.report import ReportResponse, ReportSubmit, ReportUpdate
from partnersync.services import report_service

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("/submit", status_code=status.HTTP_201_CREATED)
async def submit_report(
    data: ReportSubmit,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_roles(*SUBMITTER_ROLES))],
):
    report, warning = await report_service.submit_report(db, data, user)
    return {
        "success": True,
        "data": to_json(ReportResponse.model_validate(report)),
        "message": "Progress report submitted successfully",
        "warning": warning,
    }


@router.get("/project/{project_id}")
async def get_project_reports(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    reports = await report_service.list_project_reports(db, project_id)
    return {
        "success": True,
        "count": len(reports),
        "data": [to_json(ReportResponse.model_validate(r)) for r in reports],
    }


@router.get("/stats/summary")
async def get_stats_summary(db: Annotated[AsyncSession, Depends(get_db)]):
    summary = await report_service.stats_summary(db)
    return {"success": True, "data": to_json(summary)}


@router.put("/update/{report_id}")
async def update_report(
    report_id: str,
    data: ReportUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    report = await report_service.update_report(db, report_id, data, user)
    return {
        "success": True,
        "data": to_json(ReportResponse.model_validate(report)),
        "message": "Report updated successfully",
    }


@router.delete("/remove/{report_id}")
async def remove_report(
    report_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    await report_service.remove_report(db, report_id, user)
    return {"success": True, "message": "Report removed successfully", "data": {}}
