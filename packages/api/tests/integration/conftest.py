# This project was developed with assistance from AI tools.
"""Integration test fixtures -- real PostgreSQL, no mocks.

A session-scoped container is migrated once with ``alembic upgrade head``.
Each test gets a repository whose sessions all join one outer transaction
as savepoints; the transaction is rolled back afterwards so tests don't
leak state.
"""

import os

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

from loandesk.services.sql_repository import SqlCaseRepository

# ---------------------------------------------------------------------------
# Mark all tests in this directory as integration
# ---------------------------------------------------------------------------
pytestmark = pytest.mark.integration

DB_PACKAGE_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "..", "db")


# ---------------------------------------------------------------------------
# Session-scoped: container + engine + migrations
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container():
    """Start postgres:16 via testcontainers."""
    with PostgresContainer(
        image="postgres:16",
        username="test",
        password="test",
        dbname="test",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def db_url(pg_container):
    """Async DB URL for asyncpg."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql+asyncpg://test:test@{host}:{port}/test"


@pytest.fixture(scope="session")
def sync_db_url(pg_container):
    """Sync DB URL for Alembic (psycopg2)."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql://test:test@{host}:{port}/test"


@pytest.fixture(scope="session")
def _run_migrations(sync_db_url):
    """Run alembic upgrade head against the container."""
    os.environ["DATABASE_URL"] = sync_db_url
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config(os.path.join(DB_PACKAGE_DIR, "alembic.ini"))
    alembic_cfg.set_main_option("script_location", os.path.join(DB_PACKAGE_DIR, "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", sync_db_url)
    command.upgrade(alembic_cfg, "head")


@pytest.fixture(scope="session")
def async_engine(db_url, _run_migrations):
    """Create an async engine pointing at the test container."""
    engine = create_async_engine(db_url, echo=False, poolclass=NullPool)
    yield engine


# ---------------------------------------------------------------------------
# Function-scoped: per-test connection with savepoint rollback
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_connection(async_engine):
    conn = await async_engine.connect()
    txn = await conn.begin()
    yield conn
    await txn.rollback()
    await conn.close()


@pytest.fixture
def session_factory(db_connection):
    return async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest.fixture
def sql_repository(session_factory):
    return SqlCaseRepository(session_factory=session_factory)


@pytest.fixture
def client_factory(async_engine, sql_repository, delivery, monkeypatch):
    """Factory returning an async httpx client wired to the test database."""
    import loandesk_db.database as db_mod

    from loandesk.core.config import settings
    from loandesk.dependencies import get_delivery, get_repository
    from loandesk.main import app

    monkeypatch.setattr(settings, "REPOSITORY_BACKEND", "sql")
    monkeypatch.setattr(db_mod, "_service", db_mod.DatabaseService(async_engine))

    async def _make():
        app.dependency_overrides[get_repository] = lambda: sql_repository
        app.dependency_overrides[get_delivery] = lambda: delivery
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    yield _make

    app.dependency_overrides.clear()
