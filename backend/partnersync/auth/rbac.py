"""Role-based access control."""
from partnersync.models.user import User, UserRole

# Roles allowed to register projects and submit reports
SUBMITTER_ROLES = (UserRole.ADMIN, UserRole.PARTNER, UserRole.GOVERNMENT)


def has_role(user: User, *allowed: UserRole) -> bool:
    return user.role in allowed


def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN


def can_modify_report(user: User, reported_by: str | None) -> bool:
    """Admins may touch any report; everyone else only their own."""
    return is_admin(user) or (reported_by is not None and reported_by == user.id)
