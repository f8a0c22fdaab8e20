"""
Shared pytest fixtures.

Provides:
    - session_maker: fresh in-memory SQLite database per test, FKs enforced
    - db: a session on that database for direct setup
    - client: httpx AsyncClient bound to the app with get_db overridden
    - make_user / auth_headers: users with a given role and their bearer headers
    - make_project / make_report: persisted fixtures for statistics tests
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APP_ENV", "testing")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import partnersync.models  # noqa: F401
from partnersync.auth.jwt import create_access_token, get_password_hash
from partnersync.database import Base, enable_sqlite_foreign_keys, get_db
from partnersync.main import app
from partnersync.models.project import Project, ProjectStatus, SdgGoal
from partnersync.models.report import Report, ReportType
from partnersync.models.user import User, UserRole


@pytest.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def _get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make(role=UserRole.PARTNER, email=None, name="Test User", organization="Test Org"):
        user = User(
            name=name,
            email=email or f"{role.value}-{os.urandom(4).hex()}@partnersync.org",
            hashed_password=get_password_hash("secret123"),
            organization=organization,
            requested_role=role,
            role=role,
            is_verified=True,
        )
        db.add(user)
        await db.commit()
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture
def make_project(db):
    async def _make(
        title="Clean wells",
        budget=100000.0,
        sdg_goal=SdgGoal.CLEAN_WATER,
        status=ProjectStatus.IN_PROGRESS,
        organization="Water Org",
    ):
        project = Project(
            title=title,
            description="Borehole wells for rural schools",
            sdg_goal=sdg_goal,
            status=status,
            organization=organization,
            budget=budget,
        )
        db.add(project)
        await db.commit()
        return project

    return _make


@pytest.fixture
def make_report(db):
    async def _make(project, user, report_type=ReportType.FINANCIAL, amount_lkr=None, people_impacted=None):
        report = Report(
            project_id=project.id,
            reported_by=user.id,
            report_type=report_type,
            amount_lkr=amount_lkr,
            people_impacted=people_impacted,
            description=f"{report_type.value} update",
        )
        db.add(report)
        await db.commit()
        return report

    return _make
