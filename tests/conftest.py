"""Shared test fixtures and utilities for all tests."""
import os
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from src.app.containers import Container
from src.client import ClientRegistryClient
from src.shared.database.database import Database, DatabaseSettings


@pytest.fixture
def sqlite_db_url(tmp_path):
    """
    Async SQLite URL backed by a fresh file per test.
    Function-scoped for test isolation.
    """
    return f"sqlite+aiosqlite:///{tmp_path / 'client_registry.db'}"


@pytest.fixture
def test_settings_override(sqlite_db_url):
    """
    Centralized settings override for all test configurations.

    Points the application at the per-test SQLite database and restores the
    environment afterwards.
    """
    previous = {key: os.environ.get(key) for key in ("DATABASE_URL", "STORE_BACKEND")}
    os.environ["DATABASE_URL"] = sqlite_db_url
    os.environ["STORE_BACKEND"] = "sql"

    # Clear settings cache to force reload with new env vars
    from src.app.config import get_settings
    get_settings.cache_clear()

    yield

    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    get_settings.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def db(sqlite_db_url):
    """
    Create database instance with test database.
    Function-scoped for test isolation.
    """
    db = Database(DatabaseSettings(db_url=sqlite_db_url))
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def clean_database(db):
    """
    Start every test from an empty schema.
    Drops and recreates all tables.
    """
    await db.drop_schema()
    await db.create_schema()
    yield db


@pytest.fixture(scope="function")
def test_container(test_settings_override, clean_database):
    """
    Create a test container with database override for proper test isolation.
    Function-scoped to ensure each test gets a fresh container.

    Overrides the container's database singleton with the test database.
    """
    container = Container()

    # Override the database singleton with the test database instance
    container.database.override(providers.Object(clean_database))

    yield container
    container.database.reset_override()
    container.unwire()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_container):
    """
    Create test application with container.
    Function-scoped for test isolation.
    """
    from src.app.main import create_app

    @asynccontextmanager
    async def lifespan(app):
        # Database tables are already created by clean_database fixture
        yield

    yield create_app(test_container, lifespan=lifespan)


@pytest_asyncio.fixture
async def registry_client(test_app):
    """
    Create a registry HTTP client for testing.
    test_app already depends on clean_database for test isolation.
    """
    transport = ASGITransport(app=test_app)
    http_client = AsyncClient(transport=transport, base_url="http://test")
    client = ClientRegistryClient(base_url="http://test", client=http_client)

    async with client:
        yield client
    await http_client.aclose()


# =========================================================================
# Common repository and service fixtures (available to all test directories)
# =========================================================================

@pytest_asyncio.fixture
def client_repository(test_container):
    """Get client repository from container."""
    return test_container.client_repository()


@pytest_asyncio.fixture
def client_registry(test_container):
    """Get the SQL-backed client registry from container."""
    return test_container.client_registry()
