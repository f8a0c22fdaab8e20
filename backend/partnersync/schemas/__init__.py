"""Pydantic schemas."""
from partnersync.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from partnersync.schemas.collab import (
    CommentCreate,
    CommentResponse,
    NotificationResponse,
    PostCreate,
    PostResponse,
)
from partnersync.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from partnersync.schemas.report import (
    ReportResponse,
    ReportSubmit,
    ReportUpdate,
    StatsSummary,
)
from partnersync.schemas.sdg import SdgTargetCreate, SdgTargetResponse, SdgTargetUpdate, SyncStats
from partnersync.schemas.statistics import ProjectStatistics, ProjectWithStatistics, WarningLevel

__all__ = [
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "CommentCreate",
    "CommentResponse",
    "NotificationResponse",
    "PostCreate",
    "PostResponse",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "ReportResponse",
    "ReportSubmit",
    "ReportUpdate",
    "StatsSummary",
    "SdgTargetCreate",
    "SdgTargetResponse",
    "SdgTargetUpdate",
    "SyncStats",
    "ProjectStatistics",
    "ProjectWithStatistics",
    "WarningLevel",
]
