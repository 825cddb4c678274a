import pytest_asyncio

from sheetkeeper.core.config import get_test_settings
from sheetkeeper.db.schema import initialize
from sheetkeeper.services.character_service import CharacterService
from sheetkeeper.services.object_service import ObjectService


@pytest_asyncio.fixture
async def test_database():
    test_settings = get_test_settings()
    database = await initialize(test_settings.DATABASE_PATH)

    yield database

    await database.close()


@pytest_asyncio.fixture
async def test_db_session(test_database):
    async with test_database.exclusive() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture
async def character_service(test_database) -> CharacterService:
    return CharacterService(test_database)


@pytest_asyncio.fixture
async def object_service(test_database) -> ObjectService:
    return ObjectService(test_database)
