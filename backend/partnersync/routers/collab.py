"""Collaboration hub API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.deps import get_current_user
from partnersync.database import get_db
from partnersync.models.user import User
from partnersync.schemas.base import to_json
from partnersync.schemas.collab import CommentCreate, NotificationResponse, PostCreate, PostResponse
from partnersync.services import collab_service

router = APIRouter(
    prefix="/api/collab",
    tags=["collab"],
    dependencies=[Depends(get_current_user)],
)


@router.post("/post", status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    post = await collab_service.create_post(db, data, user)
    return {"message": "Post created successfully", "post": to_json(PostResponse.model_validate(post))}


@router.get("/feed")
async def get_feed(db: Annotated[AsyncSession, Depends(get_db)]):
    posts = await collab_service.get_feed(db)
    return [to_json(PostResponse.model_validate(p)) for p in posts]


@router.post("/comment", status_code=status.HTTP_201_CREATED)
async def add_comment(
    data: CommentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    post = await collab_service.add_comment(db, data, user)
    return {"message": "Comment added successfully", "post": to_json(PostResponse.model_validate(post))}


@router.get("/notifications")
async def get_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    notifications = await collab_service.get_notifications(db, user)
    return [to_json(NotificationResponse.model_validate(n)) for n in notifications]
