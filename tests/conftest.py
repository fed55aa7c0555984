"""
tests/conftest.py

Test fixtures for API route tests and service tests.
Includes async clients, fake accounts, dependency overrides, and a throw-away
SQLite database for exercising services against real SQL.
"""
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Must be set before settings are instantiated
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAILS_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_gigplatform.db"
os.environ["TEST_DATABASE_URL"] = "sqlite+aiosqlite:///./test_gigplatform.db"

# --- Imports ---
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gigplatform.catalog.models import Category, Location
from gigplatform.core.dependencies import get_current_user
from gigplatform.database.base import Base
from gigplatform.database.enums import UserRole, VerificationStatus
from gigplatform.database.models import Account
from gigplatform.database.session import get_db
from gigplatform.gig.models import Gig, GigStatus
from gigplatform.gig.schemas import GigCreate
from gigplatform.main import app
from gigplatform.notifications.events import EventDispatcher
from gigplatform.verification.models import ClientProfile, ProviderProfile


# --- Core Test Fixtures ---


@pytest.fixture(scope="session")
def transport() -> ASGITransport:
    """Fixture for ASGI transport."""
    return ASGITransport(app=app)


@pytest_asyncio.fixture(scope="function")
async def async_client(transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """Fixture for HTTP async client."""
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Fake Account Fixtures ---


def _fake_account(role: UserRole, name: str) -> Account:
    return Account(
        id=uuid4(),
        username=f"{name}_test",
        email=f"{name}.test@example.com",
        role=role,
        is_active=True,
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def fake_admin_user() -> Account:
    return _fake_account(UserRole.ADMIN, "admin")


@pytest.fixture
def fake_client_user() -> Account:
    return _fake_account(UserRole.CLIENT, "client")


@pytest.fixture
def fake_provider_user() -> Account:
    return _fake_account(UserRole.SERVICE_PROVIDER, "provider")


# --- Dependency Overrides ---


@pytest_asyncio.fixture
async def override_get_db() -> AsyncGenerator[None, None]:
    """Replace the DB session with a mock; services are patched in route tests."""

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def mock_current_admin_user(fake_admin_user: Account) -> AsyncGenerator[Account, None]:
    app.dependency_overrides[get_current_user] = lambda: fake_admin_user
    yield fake_admin_user
    app.dependency_overrides.pop(get_current_user, None)


@pytest_asyncio.fixture
async def mock_current_client_user(fake_client_user: Account) -> AsyncGenerator[Account, None]:
    app.dependency_overrides[get_current_user] = lambda: fake_client_user
    yield fake_client_user
    app.dependency_overrides.pop(get_current_user, None)


@pytest_asyncio.fixture
async def mock_current_provider_user(fake_provider_user: Account) -> AsyncGenerator[Account, None]:
    app.dependency_overrides[get_current_user] = lambda: fake_provider_user
    yield fake_provider_user
    app.dependency_overrides.pop(get_current_user, None)


# --- Database Fixtures (service tests) ---


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh SQLite database file per test, with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gigplatform.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


AccountFactory = Callable[..., Awaitable[Account]]


@pytest.fixture
def make_account(db_session: AsyncSession) -> AccountFactory:
    """
    Create an account, optionally with a role profile in the given verification status.
    Pass status=None to create the account without any profile.
    """

    async def _make(role: UserRole, status: VerificationStatus | None = VerificationStatus.APPROVED) -> Account:
        suffix = uuid4().hex[:8]
        account = Account(
            id=uuid4(),
            username=f"{role.value}_{suffix}",
            email=f"{role.value}_{suffix}@example.com",
            role=role,
            is_active=True,
        )
        db_session.add(account)
        if status is not None and role == UserRole.CLIENT:
            db_session.add(
                ClientProfile(
                    account_id=account.id,
                    contact_name="Test Client",
                    location="Chicago",
                    verification_status=status,
                )
            )
        elif status is not None and role == UserRole.SERVICE_PROVIDER:
            db_session.add(
                ProviderProfile(
                    account_id=account.id,
                    full_name="Test Provider",
                    location="Chicago",
                    skills=["cabling"],
                    verification_status=status,
                )
            )
        await db_session.commit()
        return account

    return _make


@pytest_asyncio.fixture
async def catalog_refs(db_session: AsyncSession) -> tuple[Category, Location]:
    category = Category(id=uuid4(), name="Network Installation", description="Cabling and routers")
    location = Location(id=uuid4(), name="Chicago")
    db_session.add_all([category, location])
    await db_session.commit()
    return category, location


@pytest.fixture
def gig_payload(catalog_refs: tuple[Category, Location]) -> Callable[..., GigCreate]:
    category, location = catalog_refs

    def _payload(**overrides: object) -> GigCreate:
        start = datetime.now(timezone.utc) + timedelta(days=1)
        data: dict[str, object] = {
            "title": "Install office Wi-Fi",
            "description": "Set up three access points on one floor",
            "category_id": category.id,
            "location_id": location.id,
            "start_date": start,
            "end_date": start + timedelta(days=2),
        }
        data.update(overrides)
        return GigCreate(**data)

    return _payload


class RecordingDispatcher(EventDispatcher):
    """Dispatcher that also keeps every published event."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[object] = []

    def publish(self, event: object) -> None:
        self.published.append(event)
        super().publish(event)


@pytest.fixture
def events() -> RecordingDispatcher:
    return RecordingDispatcher()


# --- Schema-level Fixtures (route tests) ---


@pytest.fixture
def fake_gig(fake_client_user: Account) -> Gig:
    """Unsaved Gig instance shaped like a service return value."""
    now = datetime.now(timezone.utc)
    return Gig(
        id=uuid4(),
        title="Repair CCTV camera",
        description="Front door camera shows no image",
        category_id=uuid4(),
        location_id=uuid4(),
        client_id=fake_client_user.id,
        provider_id=None,
        start_date=now + timedelta(days=1),
        end_date=now + timedelta(days=2),
        status=GigStatus.OPEN,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture(autouse=True)
def _clear_overrides() -> Generator[None, None, None]:
    yield
    app.dependency_overrides.clear()
