"""Collaboration hub schemas."""
from datetime import datetime

from pydantic import Field

from partnersync.models.collab import PostType
from partnersync.schemas.base import ApiModel


class PostCreate(ApiModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    type: PostType


class CommentCreate(ApiModel):
    post_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class CommentResponse(ApiModel):
    id: str
    user_id: str | None = Field(None, serialization_alias="user")
    user_name: str | None = None
    text: str
    created_at: datetime


class PostResponse(ApiModel):
    id: str
    author_id: str = Field(..., serialization_alias="author")
    author_name: str
    organization: str
    avatar_url: str | None = None
    title: str
    content: str
    type: PostType
    comments: list[CommentResponse] = []
    created_at: datetime


class NotificationResponse(ApiModel):
    id: str
    recipient_id: str = Field(..., serialization_alias="recipient")
    message: str
    is_read: bool
    created_at: datetime
