"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from uuid import uuid4

# Disable rate limiting and keep the app off PostgreSQL in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.session import enable_sqlite_foreign_keys
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.metadata.http_fetcher import HttpMetadataFetcher

# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()

SAMPLE_PAGE = """<!doctype html>
<html>
<head>
  <title> Example Domain </title>
  <meta name="description" content="An example page for tests.">
  <link rel="icon" href="/static/icon.png">
</head>
<body><h1>Example</h1></body>
</html>
"""


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def sample_page() -> str:
    """HTML page carrying a title, a description and a relative icon link."""
    return SAMPLE_PAGE


@pytest.fixture
def page_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Serve SAMPLE_PAGE for every URL; tests override to simulate failures."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            text=SAMPLE_PAGE,
            headers={"content-type": "text/html; charset=utf-8"},
        )

    return handler


@pytest.fixture
def metadata_fetcher(
    page_handler: Callable[[httpx.Request], httpx.Response],
) -> HttpMetadataFetcher:
    """Metadata fetcher that never touches the network."""
    return HttpMetadataFetcher(timeout=2.0, transport=httpx.MockTransport(page_handler))


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(id=TEST_USER_ID, email="test@example.com")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def app_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    metadata_fetcher: HttpMetadataFetcher,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client wired to the in-memory database, without a default user.

    Requests authenticate by sending ``auth_headers`` (or a token made with
    ``auth_provider``); anonymous requests exercise the identity gate.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_bookmark_service, get_profile_service
    from domain.services.bookmark_service import BookmarkService
    from domain.services.owner_locks import OwnerLocks
    from domain.services.profile_service import ProfileService
    from main import create_app

    app = create_app()
    owner_locks = OwnerLocks()

    def override_get_profile_service() -> ProfileService:
        return ProfileService(uow_factory, owner_locks=owner_locks)

    def override_get_bookmark_service() -> BookmarkService:
        return BookmarkService(uow_factory, metadata_fetcher=metadata_fetcher)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = override_get_profile_service
    app.dependency_overrides[get_bookmark_service] = override_get_bookmark_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    app_client: AsyncClient,
    auth_headers: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """Test client that sends the test user's token on every request."""
    app_client.headers.update(auth_headers)
    yield app_client
