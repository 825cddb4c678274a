import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sheetkeeper.db.schema import initialize
from sheetkeeper.db.session import get_database
from sheetkeeper.dependencies.services import get_character_service
from sheetkeeper.main import app


@pytest_asyncio.fixture
async def api_database():
    database = await initialize(":memory:")
    yield database
    await database.close()


@pytest_asyncio.fixture
async def client(api_database):
    app.dependency_overrides[get_database] = lambda: api_database

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client_instance:
        yield client_instance

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def mock_client(mocker):
    mock_service = mocker.AsyncMock()

    app.dependency_overrides[get_character_service] = lambda: mock_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client_instance:
        yield client_instance, mock_service

    app.dependency_overrides.clear()
