# ruff: noqa: E402
# IMPORTANT:
# 1) Set environment variables (DATABASE_URL etc.) first, then import app modules
# 2) anyio_backend must be session-scoped to avoid ScopeMismatch.

from collections.abc import AsyncGenerator
import os
import tempfile

from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
import pytest
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool


def _setup_test_environment() -> str:
    """Sets up environment variables for tests and returns the final DATABASE_URL."""
    try:
        from dotenv import load_dotenv

        load_dotenv(".env.test", override=False)
    except ImportError:
        pass  # dotenv is optional

    os.environ.setdefault("DB_CHECK_ON_START", "false")
    os.environ.setdefault("DB_CREATE_SCHEMA", "false")
    os.environ.setdefault("ENVIRONMENT", "development")

    raw_test_dsn = os.getenv("TEST_DATABASE_URL")
    if not raw_test_dsn:
        db_file = os.path.join(tempfile.gettempdir(), f"postboard_test_{os.getpid()}.sqlite3")
        raw_test_dsn = f"sqlite+aiosqlite:///{db_file}"

    def _to_async(dsn: str) -> str:
        if dsn.startswith("sqlite://"):
            return dsn.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if dsn.startswith("postgresql://"):
            return dsn.replace("postgresql://", "postgresql+asyncpg://", 1)
        return dsn

    test_database_url_async = _to_async(raw_test_dsn)

    # --- CRITICAL: Set DATABASE_URL before importing app modules ---
    os.environ["DATABASE_URL"] = test_database_url_async
    return test_database_url_async


# --- EARLY ENVIRONMENT INITIALIZATION ---
TEST_DATABASE_URL_ASYNC = _setup_test_environment()


# isort: off
from app import create_app
from db.database import Base, get_db
from db.models.post import Post

# isort: on


test_async_engine = create_async_engine(TEST_DATABASE_URL_ASYNC, poolclass=NullPool)

TestAsyncSessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=test_async_engine,
    autoflush=True,
    expire_on_commit=False,
)


# --- Pytest Fixtures ---


@pytest.fixture(scope="session")
def app():
    """FastAPI application instance for tests, created by factory."""
    return create_app()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Align anyio_backend scope with anyio plugin expectations."""
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
async def _prepare_database(anyio_backend):
    """Create schema once per test session and drop it afterwards."""
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_async_engine.dispose()


@pytest.fixture(scope="function", autouse=True)
async def _clean_posts(anyio_backend):
    """Start and finish every test with an empty posts table."""
    yield
    async with test_async_engine.begin() as conn:
        await conn.execute(delete(Post))


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession]:
    """Provide a fresh AsyncSession for each test."""
    async with TestAsyncSessionLocal() as session:
        yield session


@pytest.fixture(scope="function")
async def override_get_db(app):
    """Give each request its own session bound to the test database."""

    async def _get_db_test() -> AsyncGenerator[AsyncSession]:
        async with TestAsyncSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db_test
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture(scope="function")
async def client(app, override_get_db: None) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client with app lifespan management for integration tests.

    Redirects are not followed so tests can assert on the Location header.
    """
    async with LifespanManager(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver.local",
            follow_redirects=False,
        ) as ac:
            yield ac


@pytest.fixture(scope="function")
async def unit_client(app, override_get_db: None) -> AsyncGenerator[AsyncClient]:
    """Lightweight HTTP client for unit tests without lifespan management."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://testserver.local",
        follow_redirects=False,
    ) as ac:
        yield ac
