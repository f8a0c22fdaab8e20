"""SDG target registry and UN Global Standards sync."""
import logging

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partnersync.config import get_settings
from partnersync.database import utcnow
from partnersync.errors import NotFoundError, ValidationError, validate_object_id
from partnersync.models.sdg import SdgTarget
from partnersync.schemas.sdg import SdgTargetCreate, SdgTargetUpdate, SyncStats

logger = logging.getLogger(__name__)

GOAL_17 = "Goal 17"

# Inserted when the UN API cannot be reached
SAMPLE_TARGETS = [
    ("17.1", "Strengthen domestic resource mobilization", "Support developing countries to improve domestic capacity for tax and other revenue collection"),
    ("17.2", "Implement all development assistance commitments", "Developed countries to implement fully their official development assistance commitments"),
    ("17.3", "Mobilize additional financial resources", "Mobilize additional financial resources for developing countries from multiple sources"),
    ("17.4", "Promote environmentally sound technologies", "Promote technology transfer to developing countries"),
    ("17.5", "Enhance international cooperation on science and technology", "Promote knowledge sharing on mutually agreed terms"),
]


class UnApiUnavailable(Exception):
    """UN SDG API unreachable or returned nothing usable."""


async def get_target(db: AsyncSession, target_id: str) -> SdgTarget:
    validate_object_id(target_id, "SDG target")
    target = await db.get(SdgTarget, target_id)
    if not target:
        raise NotFoundError("SDG target", target_id)
    return target


async def _find_by_number(db: AsyncSession, target_number: str) -> SdgTarget | None:
    result = await db.execute(select(SdgTarget).where(SdgTarget.target_number == target_number))
    return result.scalar_one_or_none()


async def create_target(db: AsyncSession, data: SdgTargetCreate) -> SdgTarget:
    if await _find_by_number(db, data.target_number):
        raise ValidationError("This target number already exists")
    target = SdgTarget(**data.model_dump(), category=GOAL_17)
    db.add(target)
    await db.flush()
    return target


async def list_targets(db: AsyncSession) -> list[SdgTarget]:
    result = await db.execute(
        select(SdgTarget)
        .where(SdgTarget.category == GOAL_17)
        .order_by(SdgTarget.target_number)
    )
    return list(result.scalars().all())


async def update_target(db: AsyncSession, target_id: str, data: SdgTargetUpdate) -> SdgTarget:
    target = await get_target(db, target_id)
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is None and k in ("title", "description"):
            continue
        setattr(target, k, v)
    await db.flush()
    return target


async def delete_target(db: AsyncSession, target_id: str) -> SdgTarget:
    target = await get_target(db, target_id)
    await db.delete(target)
    return target


async def fetch_un_targets() -> list[dict]:
    settings = get_settings()
    try:
        async with httpx.AsyncClient(timeout=settings.un_sdg_timeout_seconds) as client:
            response = await client.get(
                settings.un_sdg_api_url,
                headers={"Accept": "application/json", "User-Agent": "PartnerSync/1.0"},
            )
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise UnApiUnavailable(str(exc)) from exc
    if not payload:
        raise UnApiUnavailable("No data received from UN API")
    return payload if isinstance(payload, list) else [payload]


async def _upsert_un_target(db: AsyncSession, raw: dict) -> bool:
    """Returns True when a new target was created, False when one was updated."""
    number = str(raw.get("code") or raw.get("target"))
    title = raw.get("title") or "No title available"
    fields = {
        "title": title,
        "description": raw.get("description") or title,
        "is_official_un": True,
        "category": GOAL_17,
        "last_synced": utcnow(),
    }
    existing = await _find_by_number(db, number)
    if existing:
        for k, v in fields.items():
            setattr(existing, k, v)
        await db.flush()
        return False
    db.add(SdgTarget(target_number=number, **fields))
    await db.flush()
    return True


async def _insert_sample_targets(db: AsyncSession) -> int:
    created = 0
    for number, title, description in SAMPLE_TARGETS:
        if await _find_by_number(db, number):
            continue
        db.add(SdgTarget(
            target_number=number,
            title=title,
            description=description,
            category=GOAL_17,
            is_official_un=False,
        ))
        created += 1
    await db.flush()
    return created


async def sync_with_un(db: AsyncSession) -> tuple[SyncStats, bool]:
    """
    Upsert Goal 17 targets from the UN SDG API.

    Returns the sync counts and whether the live API was used. When the API
    is unreachable the sample targets are inserted instead.
    """
    logger.info("Starting UN sync")
    try:
        raw_targets = await fetch_un_targets()
    except UnApiUnavailable as exc:
        logger.warning("UN sync failed, falling back to sample targets: %s", exc)
        created = await _insert_sample_targets(db)
        return SyncStats(new_targets=created, updated_targets=0, total_processed=created), False

    created = updated = 0
    failed: list[dict] = []
    for raw in raw_targets:
        if not isinstance(raw, dict):
            logger.error("Failed processing target: %r", raw)
            failed.append({"targetNumber": None, "error": "Malformed target entry"})
            continue
        if not (raw.get("code") or raw.get("target")):
            continue
        if await _upsert_un_target(db, raw):
            created += 1
        else:
            updated += 1

    logger.info("Sync complete: %d new, %d updated, %d failed", created, updated, len(failed))
    stats = SyncStats(
        new_targets=created,
        updated_targets=updated,
        failed_targets=failed,
        total_processed=created + updated + len(failed),
    )
    return stats, True
