"""
Pytest configuration and fixtures.
"""

import os

# Settings are read once and cached; set the test environment before any
# application module is imported.
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_pincast_expo.db"
os.environ["ANALYTICS_REFRESH_INTERVAL_SECONDS"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_FORMAT"] = "console"
os.environ.pop("IDENTITY_JWKS_URL", None)

from datetime import timedelta
from typing import AsyncGenerator, Iterable, List, Optional
from uuid import UUID, uuid4

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pincast_expo.data.repositories import (
    EventRepository,
    ListingRepository,
    UserRepository,
    VersionRepository,
)
from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.entities.analytics_event import SESSION_START, AnalyticsEvent
from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.entities.version import Version
from pincast_expo.domain.value_objects.geo_point import GeoPoint
from pincast_expo.domain.value_objects.listing_state import ListingState
from pincast_expo.domain.value_objects.user_role import UserRole
from pincast_expo.infra.config.database import build_engine, get_db_session, init_models
from pincast_expo.infra.config.settings import get_settings


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: pure logic, no I/O")
    config.addinivalue_line("markers", "integration: real SQLite database")
    config.addinivalue_line("markers", "e2e: full HTTP round trips")


# ---------- DATABASE FIXTURES ----------


@pytest.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database file per test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ---------- SEED DATA ----------


class Seeder:
    """Writes fixture rows through the real repositories, one commit each."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def user(
        self,
        role: UserRole = UserRole.PLAYER,
        subject: Optional[str] = None,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> User:
        user = User(
            id=uuid4(),
            identity_subject=subject or f"idp|{uuid4().hex[:12]}",
            role=role,
            email=email,
            display_name=display_name,
        )
        async with self.session_factory() as session:
            await UserRepository(session).create(user)
            await session.commit()
        return user

    async def listing(
        self,
        owner: User,
        state: ListingState = ListingState.PUBLISHED,
        lng: float = 0.0,
        lat: float = 0.0,
        radius: float = 1000.0,
        title: Optional[str] = None,
        slug: Optional[str] = None,
        listing_id: Optional[UUID] = None,
    ) -> Listing:
        suffix = uuid4().hex[:8]
        listing = Listing(
            id=listing_id or uuid4(),
            owner_id=owner.id,
            title=title or f"Game {suffix}",
            slug=slug or f"game-{suffix}",
            state=state,
            center=GeoPoint(longitude=lng, latitude=lat),
            radius_meters=radius,
        )
        async with self.session_factory() as session:
            await ListingRepository(session).create(listing)
            await session.commit()
        return listing

    async def version(
        self,
        listing: Listing,
        semver: str = "0.1.0",
        deploy_url: Optional[str] = "https://cdn.example.com/build.zip",
        age: timedelta = timedelta(0),
    ) -> Version:
        version = Version(
            id=uuid4(),
            listing_id=listing.id,
            semver=semver,
            deploy_url=deploy_url,
            created_at=utcnow() - age,
        )
        async with self.session_factory() as session:
            await VersionRepository(session).create(version)
            await session.commit()
        return version

    async def sessions(
        self,
        listing: Listing,
        count: int,
        age: timedelta = timedelta(hours=1),
        event: str = SESSION_START,
    ) -> None:
        async with self.session_factory() as session:
            repo = EventRepository(session)
            for _ in range(count):
                await repo.append_event(
                    AnalyticsEvent(
                        listing_id=listing.id,
                        actor_id=uuid4(),
                        event=event,
                        timestamp=utcnow() - age,
                    )
                )
            await session.commit()

    async def events(self, listing_id: UUID) -> List[AnalyticsEvent]:
        async with self.session_factory() as session:
            return await EventRepository(session).list_for_listing(listing_id)

    async def reload(self, listing_id: UUID) -> Optional[Listing]:
        async with self.session_factory() as session:
            return await ListingRepository(session).get_by_id(listing_id)


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)


# ---------- AUTH HELPERS ----------


def make_identity_token(
    subject: str,
    scopes: Iterable[str] = (),
    expires_in: timedelta = timedelta(hours=1),
    secret: Optional[str] = None,
) -> str:
    """Identity-provider style token signed with the shared test secret."""
    now = utcnow()
    payload = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    scopes = list(scopes)
    if scopes:
        payload["scope"] = " ".join(scopes)
    return jwt.encode(payload, secret or get_settings().jwt_secret_key, algorithm="HS256")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def staff(seed) -> User:
    return await seed.user(
        role=UserRole.STAFF, subject="idp|staff", email="reviewer@pincast.fm"
    )


@pytest.fixture
def staff_headers(staff) -> dict:
    return bearer(make_identity_token(staff.identity_subject))


@pytest.fixture
async def developer(seed) -> User:
    return await seed.user(
        role=UserRole.DEVELOPER,
        subject="idp|dev",
        email="dev@studio.example",
        display_name="Studio Dev",
    )


# ---------- API TESTING FIXTURES ----------


@pytest.fixture
def app(session_factory):
    """Application wired to the per-test database."""
    from pincast_expo.main import create_app

    application = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_db_session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as ac:
        yield ac


@pytest.fixture
def make_token():
    return make_identity_token


@pytest.fixture
def auth_headers():
    return bearer
