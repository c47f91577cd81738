"""Integration test fixtures backed by a real PostgreSQL server.

Most fixtures are inherited from tests/conftest.py. The ``db`` fixture is
overridden so that every inherited fixture (clean_database, test_container,
registry_client, ...) runs against PostgreSQL instead of SQLite.

The whole directory is skipped when Docker is not reachable.
"""
import asyncio

import pytest
import pytest_asyncio

from src.shared.database.database import Database, DatabaseSettings

postgres = pytest.importorskip("testcontainers.postgres")
docker_errors = pytest.importorskip("docker.errors")


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL container for the integration session."""
    try:
        container = postgres.PostgresContainer("postgres:16-alpine")
        container.start()
    except docker_errors.DockerException as e:
        pytest.skip(f"Docker is not available: {e}")
    yield container
    container.stop()


@pytest_asyncio.fixture(scope="function")
async def db(postgres_container):
    """Create a database bound to the container."""
    # testcontainers provides get_connection_url() which returns a sync URL
    # We need to convert it to an async URL for asyncpg
    connection_url = postgres_container.get_connection_url()
    async_url = connection_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")

    db = Database(DatabaseSettings(db_url=async_url))
    await wait_till_db_ready(db)
    yield db
    await db.dispose()


# This is needed due to Colima/Mac setup and a delay in binding ports
async def wait_till_db_ready(db: Database):
    max_attempts = 10
    for attempt in range(max_attempts):
        try:
            async with db._engine.begin():
                return
        except Exception:
            await asyncio.sleep(0.1)
    raise RuntimeError(f"Database not ready after {max_attempts} attempts")
