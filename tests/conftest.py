"""Test config and shared fixtures."""
import os

# Point the application at SQLite before anything reads the settings
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_DIR", "logs/test")

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool

from main import app
from core.database.sql_driver import SQLDriver
from core.repository.factory import RepositoryFactory
from apps.catalog.api.router import get_repository_factory
import apps.models  # noqa: F401  (registers table models in metadata)


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def driver() -> AsyncGenerator[SQLDriver, None]:
    """Create a test database with every registered table."""
    test_driver = SQLDriver(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await test_driver.create_all()
    yield test_driver
    await test_driver.drop_all()
    await test_driver.disconnect()


@pytest.fixture(params=["orm", "raw"])
async def repository_factory(request, driver: SQLDriver) -> RepositoryFactory:
    """Repository factory for each implementation; contract tests run against both."""
    return RepositoryFactory(driver, use_raw_sql=request.param == "raw")


@pytest.fixture
async def client(
    repository_factory: RepositoryFactory
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client wired to the test repository factory."""
    app.dependency_overrides[get_repository_factory] = lambda: repository_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
