import json
from uuid import UUID

import pytest

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.repositories.character_repository import CharacterRepository


@pytest.mark.asyncio
async def test_insert_returns_generated_uuid(test_db_session):
    repo = CharacterRepository(test_db_session)

    uuid = await repo.insert("Hero", "Game1", json.dumps({"level": 1}))

    assert isinstance(uuid, UUID)
    character = await repo.get("Hero", "Game1")
    assert character is not None
    assert character.uuid == uuid
    assert json.loads(character.data) == {"level": 1}


@pytest.mark.asyncio
async def test_insert_without_payload_stores_null(test_db_session):
    repo = CharacterRepository(test_db_session)

    await repo.insert("Hero", "Game1")

    character = await repo.get("Hero", "Game1")
    assert character is not None
    assert character.data is None


@pytest.mark.asyncio
async def test_insert_duplicate_raises_and_keeps_original(test_db_session):
    repo = CharacterRepository(test_db_session)
    original_uuid = await repo.insert("Hero", "Game1", '{"level": 1}')
    await test_db_session.commit()

    with pytest.raises(SheetDomainError) as exc_info:
        await repo.insert("Hero", "Game1", '{"level": 99}')

    assert exc_info.value.code == DomainErrorCode.DUPLICATE_KEY
    assert exc_info.value.details == {"name": "Hero", "game": "Game1"}

    character = await repo.get("Hero", "Game1")
    assert character.uuid == original_uuid
    assert character.data == '{"level": 1}'
    assert await repo.count(name="Hero") == 1


@pytest.mark.asyncio
async def test_same_name_in_different_games(test_db_session):
    repo = CharacterRepository(test_db_session)

    first = await repo.insert("Hero", "Game1")
    second = await repo.insert("Hero", "Game2")

    assert first != second
    assert await repo.count(name="Hero") == 2


@pytest.mark.asyncio
async def test_get_missing_returns_none(test_db_session):
    repo = CharacterRepository(test_db_session)

    assert await repo.get("Nobody", "Game1") is None


@pytest.mark.asyncio
async def test_get_or_raise_missing(test_db_session):
    repo = CharacterRepository(test_db_session)

    with pytest.raises(SheetDomainError) as exc_info:
        await repo.get_or_raise("Nobody", "Game1")

    assert exc_info.value.code == DomainErrorCode.CHARACTER_NOT_FOUND
    assert exc_info.value.details["conditions"] == {
        "name": "Nobody",
        "game": "Game1",
    }


@pytest.mark.asyncio
async def test_get_by_uuid(test_db_session):
    repo = CharacterRepository(test_db_session)
    uuid = await repo.insert("Hero", "Game1")

    character = await repo.get_by_uuid(uuid)

    assert character is not None
    assert character.name == "Hero"
    assert character.game == "Game1"


@pytest.mark.asyncio
async def test_update_existing(test_db_session):
    repo = CharacterRepository(test_db_session)
    await repo.insert("Hero", "Game1", "{}")

    rows = await repo.update("Hero", "Game1", '{"level": 2}')
    test_db_session.expunge_all()

    assert rows == 1
    character = await repo.get("Hero", "Game1")
    assert character.data == '{"level": 2}'


@pytest.mark.asyncio
async def test_update_missing_affects_nothing(test_db_session):
    repo = CharacterRepository(test_db_session)

    rows = await repo.update("Nobody", "Game1", "{}")

    assert rows == 0
    assert await repo.get("Nobody", "Game1") is None


@pytest.mark.asyncio
async def test_delete(test_db_session):
    repo = CharacterRepository(test_db_session)
    await repo.insert("Hero", "Game1")

    assert await repo.delete("Hero", "Game1") == 1
    assert await repo.delete("Hero", "Game1") == 0
    assert await repo.get("Hero", "Game1") is None


@pytest.mark.asyncio
async def test_list_by_game(test_db_session):
    repo = CharacterRepository(test_db_session)
    await repo.insert("Hero", "Game1")
    await repo.insert("Villain", "Game1")
    await repo.insert("Hero", "Game2")

    characters = await repo.list_by_game("Game1")

    assert sorted(c.name for c in characters) == ["Hero", "Villain"]
