"""Auth API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.deps import require_roles
from partnersync.auth.jwt import create_access_token
from partnersync.database import get_db
from partnersync.models.user import User, UserRole
from partnersync.schemas.auth import Token, UserCreate, UserLogin
from partnersync.schemas.base import to_json
from partnersync.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])

AdminUser = Annotated[User, Depends(require_roles(UserRole.ADMIN))]


@router.post("/register", response_model=Token)
async def register(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await auth_service.create_user(db, data)
    token = create_access_token(user.id)
    return Token(access_token=token, user=auth_service.user_to_response(user))


@router.post("/login", response_model=Token)
async def login(
    data: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not data.email or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide an email and password",
        )
    user = await auth_service.authenticate_user(db, data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    token = create_access_token(user.id)
    return Token(access_token=token, user=auth_service.user_to_response(user))


@router.put("/approve/{user_id}")
async def approve_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    user = await auth_service.approve_user(db, user_id)
    return {
        "success": True,
        "data": to_json(auth_service.user_to_response(user)),
        "message": f"User verified! Role updated to {user.role.value}",
    }


@router.get("/users")
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    users = await auth_service.list_users(db)
    return {
        "success": True,
        "count": len(users),
        "data": [to_json(auth_service.user_to_response(u)) for u in users],
    }


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: AdminUser,
):
    await auth_service.delete_user(db, user_id)
    return {"success": True, "data": {}}
