"""SQLAlchemy models."""
from partnersync.models.collab import Notification, Post, PostComment, PostType
from partnersync.models.project import Project, ProjectStatus, SdgGoal
from partnersync.models.report import Report, ReportType
from partnersync.models.sdg import SdgTarget
from partnersync.models.user import User, UserRole

__all__ = [
    "Notification",
    "Post",
    "PostComment",
    "PostType",
    "Project",
    "ProjectStatus",
    "SdgGoal",
    "Report",
    "ReportType",
    "SdgTarget",
    "User",
    "UserRole",
]
