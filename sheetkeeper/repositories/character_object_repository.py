from typing import cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sheetkeeper.core.error import DomainErrorCode
from sheetkeeper.models.character_object import CharacterObject
from sheetkeeper.models.game_object import GameObject
from sheetkeeper.repositories.base_repository import BaseRepository
from sheetkeeper.schemas.game_object import OwnedObject


class CharacterObjectRepository(BaseRepository[CharacterObject]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, CharacterObject, DomainErrorCode.OBJECT_NOT_FOUND)

    async def add(
        self, game: str, character_name: str, object_id: int, quantity: int = 1
    ) -> int:
        association = await self.create(
            CharacterObject(
                game=game,
                character_name=character_name,
                object_id=object_id,
                quantity=quantity,
            )
        )
        return cast(int, association.id)

    async def get(
        self, game: str, character_name: str, object_id: int
    ) -> CharacterObject | None:
        return await self.filter_one(
            game=game, character_name=character_name, object_id=object_id
        )

    async def remove(self, game: str, character_name: str, object_id: int) -> int:
        return await self.delete_where(
            game=game, character_name=character_name, object_id=object_id
        )

    async def set_quantity(
        self, game: str, character_name: str, object_id: int, quantity: int
    ) -> int:
        return await self.update_where(
            {"quantity": quantity},
            game=game,
            character_name=character_name,
            object_id=object_id,
        )

    async def list_for_character(
        self, game: str, character_name: str
    ) -> list[OwnedObject]:
        stmt = (
            select(
                CharacterObject.object_id,
                GameObject.name,
                GameObject.type,
                CharacterObject.quantity,
                GameObject.properties,
            )
            .join(GameObject, GameObject.id == CharacterObject.object_id)  # type: ignore[arg-type]
            .where(
                CharacterObject.game == game,
                CharacterObject.character_name == character_name,
            )
            .order_by(CharacterObject.id)  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return [OwnedObject(**row._mapping) for row in result.all()]
