from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.models.character import Character
from sheetkeeper.repositories.base_repository import BaseRepository


class CharacterRepository(BaseRepository[Character]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Character, DomainErrorCode.CHARACTER_NOT_FOUND)

    async def insert(self, name: str, game: str, data: str | None = None) -> UUID:
        if await self.count(name=name, game=game):
            raise SheetDomainError(
                code=DomainErrorCode.DUPLICATE_KEY,
                message=f"Character {name!r} already exists in game {game!r}",
                details={"name": name, "game": game},
            )

        character = await self.create(Character(name=name, game=game, data=data))
        return character.uuid

    async def get(self, name: str, game: str) -> Character | None:
        return await self.filter_one(name=name, game=game)

    async def get_or_raise(self, name: str, game: str) -> Character:
        return await self.filter_one_or_raise(name=name, game=game)

    async def get_by_uuid(self, uuid: UUID) -> Character | None:
        return await self.filter_one(uuid=uuid)

    async def update(self, name: str, game: str, data: str | None) -> int:
        return await self.update_where({"data": data}, name=name, game=game)

    async def delete(self, name: str, game: str) -> int:
        return await self.delete_where(name=name, game=game)

    async def list_by_game(self, game: str) -> list[Character]:
        return await self.filter(game=game)
