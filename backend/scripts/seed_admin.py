"""Seed an approved admin user. Run: python -m scripts.seed_admin"""
import asyncio
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from partnersync.auth.jwt import get_password_hash
from partnersync.database import async_session_maker, init_db
from partnersync.models.user import User, UserRole

ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@partnersync.org")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin123")


async def seed():
    await init_db()
    async with async_session_maker() as db:
        r = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
        if not r.scalar_one_or_none():
            db.add(User(
                name="Admin User",
                email=ADMIN_EMAIL,
                hashed_password=get_password_hash(ADMIN_PASSWORD),
                organization="PartnerSync",
                requested_role=UserRole.ADMIN,
                role=UserRole.ADMIN,
                is_verified=True,
            ))
        await db.commit()
    print(f"Seeded admin user ({ADMIN_EMAIL})")


if __name__ == "__main__":
    asyncio.run(seed())
