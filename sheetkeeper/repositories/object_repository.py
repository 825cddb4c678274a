from typing import Any, cast

from sqlalchemy.ext.asyncio import AsyncSession

from sheetkeeper.core.error import DomainErrorCode
from sheetkeeper.models.game_object import GameObject
from sheetkeeper.repositories.base_repository import BaseRepository


class ObjectRepository(BaseRepository[GameObject]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, GameObject, DomainErrorCode.OBJECT_NOT_FOUND)

    async def insert(
        self, name: str, type: str, properties: dict[str, Any] | None = None
    ) -> int:
        game_object = await self.create(
            GameObject(name=name, type=type, properties=properties)
        )
        return cast(int, game_object.id)

    async def get(self, object_id: int) -> GameObject | None:
        return await self.filter_one(id=object_id)

    async def get_or_raise(self, object_id: int) -> GameObject:
        return await self.filter_one_or_raise(id=object_id)

    async def update(self, object_id: int, properties: dict[str, Any] | None) -> int:
        return await self.update_where({"properties": properties}, id=object_id)

    async def delete(self, object_id: int) -> int:
        return await self.delete_where(id=object_id)
