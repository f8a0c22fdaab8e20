"""Collaboration hub: posts, comments and notifications."""
from urllib.parse import quote

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from partnersync.config import get_settings
from partnersync.errors import NotFoundError, validate_object_id
from partnersync.models.collab import Notification, Post, PostComment
from partnersync.models.user import User
from partnersync.schemas.collab import CommentCreate, PostCreate


def avatar_url_for(seed: str) -> str:
    """DiceBear initials avatar; needs no API key."""
    return f"{get_settings().avatar_base_url}?seed={quote(seed, safe='')}"


async def _load_post(db: AsyncSession, post_id: str) -> Post | None:
    result = await db.execute(
        select(Post)
        .where(Post.id == post_id)
        .options(selectinload(Post.comments))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_post(db: AsyncSession, data: PostCreate, user: User) -> Post:
    post = Post(
        author_id=user.id,
        author_name=user.name,
        organization=user.organization,
        avatar_url=avatar_url_for(user.organization or user.name),
        title=data.title,
        content=data.content,
        type=data.type,
    )
    db.add(post)
    await db.flush()
    return await _load_post(db, post.id)


async def get_feed(db: AsyncSession) -> list[Post]:
    result = await db.execute(
        select(Post)
        .options(selectinload(Post.comments))
        .order_by(Post.created_at.desc())
    )
    return list(result.scalars().all())


async def add_comment(db: AsyncSession, data: CommentCreate, user: User) -> Post:
    """Append a comment and notify the author, unless they commented on their own post."""
    validate_object_id(data.post_id, "Post")
    post = await _load_post(db, data.post_id)
    if not post:
        raise NotFoundError("Post", data.post_id)

    post.comments.append(PostComment(user_id=user.id, user_name=user.name, text=data.text))
    if post.author_id != user.id:
        db.add(Notification(
            recipient_id=post.author_id,
            message=f'{user.name} offered help on your post: "{post.title}"',
        ))
    await db.flush()
    return await _load_post(db, post.id)


async def get_notifications(db: AsyncSession, user: User) -> list[Notification]:
    """Caller's notifications, newest first. Fetching marks them read."""
    result = await db.execute(
        select(Notification)
        .where(Notification.recipient_id == user.id)
        .order_by(Notification.created_at.desc())
    )
    notifications = list(result.scalars().all())
    await db.execute(
        update(Notification)
        .where(Notification.recipient_id == user.id, Notification.is_read.is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    return notifications
