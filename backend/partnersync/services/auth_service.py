"""Authentication and user administration service."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.jwt import get_password_hash, verify_password
from partnersync.errors import NotFoundError, ValidationError, validate_object_id
from partnersync.models.user import User, UserRole
from partnersync.schemas.auth import UserCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """Register a user. Everyone starts as ``public`` until an admin approves."""
    result = await db.execute(select(User).where(User.email == data.email))
    if result.scalar_one_or_none():
        raise ValidationError("User already exists")
    user = User(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        organization=data.organization,
        role=UserRole.PUBLIC,
        requested_role=data.role,
    )
    db.add(user)
    await db.flush()
    return user


async def authenticate_user(db: AsyncSession, data: UserLogin) -> User | None:
    """Authenticate user by email and password."""
    result = await db.execute(select(User).where(User.email == data.email.strip().lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(data.password, user.hashed_password):
        return None
    return user


async def get_user(db: AsyncSession, user_id: str) -> User:
    validate_object_id(user_id, "User")
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def approve_user(db: AsyncSession, user_id: str) -> User:
    """Grant the requested role and mark the account verified."""
    user = await get_user(db, user_id)
    user.role = user.requested_role or UserRole.PARTNER
    user.is_verified = True
    await db.flush()
    logger.info("Approved user %s as %s", user.id, user.role.value)
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def delete_user(db: AsyncSession, user_id: str) -> None:
    user = await get_user(db, user_id)
    await db.delete(user)
    logger.info("Deleted user %s", user_id)


def user_to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)
