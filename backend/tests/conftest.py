"""Shared fixtures: in-memory store, pinned clock, seeded employees, API client."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from sims_api.config import Settings
from sims_api.database import Database
from sims_api.dependencies import get_clock
from sims_api.main import create_app
from sims_api.models.orm import Base, EmployeeORM
from sims_api.security.password import PasswordService
from sims_api.security.tokens import TokenIssuer

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-jwt-secret-0123456789-abcdefghij"
TEST_FRONTEND_URL = "https://hr.example.com"
TEST_PASSWORD = "Sup3r-Secret-Pass"

# Wednesday, so the week starts on Monday 2026-10-12
START_TIME = datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """Clock the tests move by hand."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        database_url=TEST_DATABASE_URL,
        jwt_secret=TEST_JWT_SECRET,
        frontend_url=TEST_FRONTEND_URL,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START_TIME)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture(scope="session")
def password_hash() -> str:
    # Low cost factor keeps the suite fast; verification reads the cost from the hash
    return PasswordService(rounds=4).hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield Database(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def employees(database: Database, password_hash: str) -> dict[str, UUID]:
    """Seed one employee per role plus a supervisor's direct report.

    Returns:
        Mapping of fixture name to employee id
    """
    async with database.session_maker() as session:
        admin = EmployeeORM(email="admin@example.com", role="admin", password_hash=password_hash)
        hr = EmployeeORM(email="hr@example.com", role="hr", password_hash=password_hash)
        supervisor = EmployeeORM(
            email="supervisor@example.com", role="supervisor", password_hash=password_hash
        )
        other_supervisor = EmployeeORM(
            email="other.supervisor@example.com", role="supervisor", password_hash=password_hash
        )
        observer = EmployeeORM(email="observer@example.com", role="observer", password_hash=password_hash)
        session.add_all([admin, hr, supervisor, other_supervisor, observer])
        await session.flush()

        report = EmployeeORM(
            email="report@example.com",
            role="operator",
            password_hash=password_hash,
            manager_id=supervisor.id,
        )
        other_report = EmployeeORM(
            email="other.report@example.com",
            role="operator",
            password_hash=password_hash,
            manager_id=other_supervisor.id,
        )
        unmanaged = EmployeeORM(email="unmanaged@example.com", role="operator", password_hash=password_hash)
        session.add_all([report, other_report, unmanaged])
        await session.commit()

        return {
            "admin": admin.id,
            "hr": hr.id,
            "supervisor": supervisor.id,
            "other_supervisor": other_supervisor.id,
            "observer": observer.id,
            "report": report.id,
            "other_report": other_report.id,
            "unmanaged": unmanaged.id,
        }


@pytest_asyncio.fixture
async def client(
    settings: Settings,
    database: Database,
    clock: FakeClock,
    employees: dict[str, UUID],
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(settings=settings, database=database)
    app.dependency_overrides[get_clock] = lambda: clock

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(token_issuer: TokenIssuer, employees: dict[str, UUID]):
    """Build bearer headers for a seeded employee by fixture name."""

    def _headers(name: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_issuer.issue(employees[name])}"}

    return _headers
