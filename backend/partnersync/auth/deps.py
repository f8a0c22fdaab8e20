"""Auth dependencies for FastAPI."""
from typing import Annotated, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.auth.jwt import decode_user_id
from partnersync.auth.rbac import has_role
from partnersync.database import get_db
from partnersync.models.user import User, UserRole

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized to access this route",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_user_id(credentials.credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user = await db.get(User, user_id)
    # Token may outlive a deleted account
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def require_roles(*allowed: UserRole) -> Callable:
    """Dependency factory: current user must hold one of ``allowed``."""

    async def dependency(user: Annotated[User, Depends(get_current_user)]) -> User:
        if not has_role(user, *allowed):
            role = user.role.value if hasattr(user.role, "value") else str(user.role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role '{role}' is not authorized to access this route",
            )
        return user

    return dependency
