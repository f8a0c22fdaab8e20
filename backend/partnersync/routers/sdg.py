"""SDG target API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.deps import require_roles
from partnersync.database import get_db
from partnersync.models.user import User, UserRole
from partnersync.schemas.base import to_json
from partnersync.schemas.sdg import SdgTargetCreate, SdgTargetResponse, SdgTargetUpdate
from partnersync.services import sdg_service

router = APIRouter(prefix="/api/sdg", tags=["sdg"])

AdminUser = Annotated[User, Depends(require_roles(UserRole.ADMIN))]


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_target(
    data: SdgTargetCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    target = await sdg_service.create_target(db, data)
    return {
        "success": True,
        "message": "SDG target created successfully",
        "data": to_json(SdgTargetResponse.model_validate(target)),
    }


@router.get("/all")
async def list_targets(db: Annotated[AsyncSession, Depends(get_db)]):
    targets = await sdg_service.list_targets(db)
    return {
        "success": True,
        "count": len(targets),
        "data": [to_json(SdgTargetResponse.model_validate(t)) for t in targets],
    }


@router.post("/sync-un")
async def sync_with_un(
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    stats, live = await sdg_service.sync_with_un(db)
    message = (
        "Successfully synced with UN Global Standards"
        if live
        else "UN API unavailable. Created sample targets instead."
    )
    return {"success": True, "message": message, "stats": to_json(stats)}


@router.get("/{target_id}")
async def get_target(
    target_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    target = await sdg_service.get_target(db, target_id)
    return {"success": True, "data": to_json(SdgTargetResponse.model_validate(target))}


@router.put("/update/{target_id}")
async def update_target(
    target_id: str,
    data: SdgTargetUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    target = await sdg_service.update_target(db, target_id, data)
    return {
        "success": True,
        "message": "SDG target updated successfully",
        "data": to_json(SdgTargetResponse.model_validate(target)),
    }


@router.delete("/delete/{target_id}")
async def delete_target(
    target_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    target = await sdg_service.delete_target(db, target_id)
    return {
        "success": True,
        "message": "SDG target deleted successfully",
        "data": to_json(SdgTargetResponse.model_validate(target)),
    }
