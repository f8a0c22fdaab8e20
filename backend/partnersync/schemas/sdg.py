"""SDG target schemas."""
from datetime import datetime

from pydantic import Field

from partnersync.schemas.base import ApiModel


class SdgTargetCreate(ApiModel):
    target_number: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    indicator_code: str | None = None
    benchmark: str | None = None


class SdgTargetUpdate(ApiModel):
    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    benchmark: str | None = None


class SdgTargetResponse(ApiModel):
    id: str
    target_number: str
    title: str
    description: str
    indicator_code: str | None = None
    benchmark: str | None = None
    category: str
    is_official_un: bool = Field(False, alias="isOfficialUN")
    last_synced: datetime | None = None


class SyncStats(ApiModel):
    new_targets: int
    updated_targets: int
    failed_targets: list[dict] = []
    total_processed: int
