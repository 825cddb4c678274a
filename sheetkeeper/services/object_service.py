import logging
from typing import Any

from sheetkeeper.db.database import Database
from sheetkeeper.models.game_object import GameObject
from sheetkeeper.repositories.character_object_repository import (
    CharacterObjectRepository,
)
from sheetkeeper.repositories.object_repository import ObjectRepository
from sheetkeeper.schemas.game_object import OwnedObject
from sheetkeeper.util.validators import validate_quantity

logger = logging.getLogger(__name__)


class ObjectService:
    def __init__(self, database: Database):
        self.database = database

    async def create_object(
        self, name: str, type: str, properties: dict[str, Any] | None = None
    ) -> int:
        async with self.database.exclusive() as session:
            object_id = await ObjectRepository(session).insert(name, type, properties)
            await session.commit()

        logger.info(f"Created {type} object {name!r} ({object_id})")
        return object_id

    async def get_object(self, object_id: int) -> GameObject:
        async with self.database.exclusive() as session:
            return await ObjectRepository(session).get_or_raise(object_id)

    async def update_object_properties(
        self, object_id: int, properties: dict[str, Any] | None
    ) -> int:
        async with self.database.exclusive() as session:
            rows = await ObjectRepository(session).update(object_id, properties)
            await session.commit()
        return rows

    async def delete_object(self, object_id: int) -> int:
        async with self.database.exclusive() as session:
            rows = await ObjectRepository(session).delete(object_id)
            await session.commit()
        return rows

    async def grant_object(
        self, game: str, character_name: str, object_id: int, quantity: int = 1
    ) -> int:
        validate_quantity(quantity)

        async with self.database.exclusive() as session:
            association_id = await CharacterObjectRepository(session).add(
                game, character_name, object_id, quantity
            )
            await session.commit()

        logger.info(
            f"Granted object {object_id} x{quantity} to {character_name!r} in {game!r}"
        )
        return association_id

    async def revoke_object(self, game: str, character_name: str, object_id: int) -> int:
        async with self.database.exclusive() as session:
            rows = await CharacterObjectRepository(session).remove(
                game, character_name, object_id
            )
            await session.commit()
        return rows

    async def set_object_quantity(
        self, game: str, character_name: str, object_id: int, quantity: int
    ) -> int:
        validate_quantity(quantity, minimum=0)

        async with self.database.exclusive() as session:
            rows = await CharacterObjectRepository(session).set_quantity(
                game, character_name, object_id, quantity
            )
            await session.commit()
        return rows

    async def list_character_objects(
        self, game: str, character_name: str
    ) -> list[OwnedObject]:
        async with self.database.exclusive() as session:
            return await CharacterObjectRepository(session).list_for_character(
                game, character_name
            )
