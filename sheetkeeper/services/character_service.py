import logging
from typing import Any
from uuid import UUID

from sheetkeeper.core.config import settings
from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.db.database import Database
from sheetkeeper.models.character import Character
from sheetkeeper.repositories.character_repository import CharacterRepository
from sheetkeeper.schemas.character import UpdateControlsRequest
from sheetkeeper.util.documents import dump_document, load_document, merge_field
from sheetkeeper.util.validators import (
    validate_character_name,
    validate_controls_request,
    validate_field_key,
    validate_game_name,
)

logger = logging.getLogger(__name__)

CONTROLS_KEY = "controls"


class CharacterService:
    def __init__(self, database: Database, max_document_bytes: int | None = None):
        self.database = database
        self.max_document_bytes = (
            max_document_bytes
            if max_document_bytes is not None
            else settings.MAX_DOCUMENT_BYTES
        )

    async def create_character(
        self, name: str, game: str, document: dict[str, Any] | None = None
    ) -> UUID:
        validate_character_name(name)
        validate_game_name(game)
        data = (
            dump_document(document, self.max_document_bytes)
            if document is not None
            else None
        )

        async with self.database.exclusive() as session:
            uuid = await CharacterRepository(session).insert(name, game, data)
            await session.commit()

        logger.info(f"Created character {name!r} in game {game!r} ({uuid})")
        return uuid

    async def get_character(self, name: str, game: str) -> Character:
        async with self.database.exclusive() as session:
            return await CharacterRepository(session).get_or_raise(name, game)

    async def get_character_by_uuid(self, uuid: UUID) -> Character:
        async with self.database.exclusive() as session:
            character = await CharacterRepository(session).get_by_uuid(uuid)

        if character is None:
            raise SheetDomainError(
                code=DomainErrorCode.CHARACTER_NOT_FOUND,
                message=f"Character with UUID {uuid} not found",
                details={"uuid": str(uuid)},
            )
        return character

    async def get_document(self, name: str, game: str) -> dict[str, Any]:
        character = await self.get_character(name, game)
        return load_document(character.data, name=name, game=game)

    async def replace_document(
        self, name: str, game: str, document: dict[str, Any] | None
    ) -> int:
        data = (
            dump_document(document, self.max_document_bytes)
            if document is not None
            else None
        )

        async with self.database.exclusive() as session:
            rows = await CharacterRepository(session).update(name, game, data)
            await session.commit()
        return rows

    async def delete_character(self, name: str, game: str) -> int:
        async with self.database.exclusive() as session:
            rows = await CharacterRepository(session).delete(name, game)
            await session.commit()

        if rows:
            logger.info(f"Deleted character {name!r} from game {game!r}")
        return rows

    async def apply_partial_update(
        self, name: str, game: str, field_key: str, field_value: Any
    ) -> UUID:
        validate_character_name(name)
        validate_game_name(game)
        validate_field_key(field_key)

        async with self.database.exclusive() as session:
            repository = CharacterRepository(session)
            existing = await repository.get(name, game)

            if existing is not None:
                document = load_document(existing.data, name=name, game=game)
                document = merge_field(document, field_key, field_value)
                await repository.update(
                    name, game, dump_document(document, self.max_document_bytes)
                )
                uuid = existing.uuid
            else:
                document = {field_key: field_value}
                uuid = await repository.insert(
                    name, game, dump_document(document, self.max_document_bytes)
                )

            await session.commit()

        logger.debug(
            f"Merged {field_key!r} into character {name!r} in game {game!r} ({uuid})"
        )
        return uuid

    async def update_controls(self, request: UpdateControlsRequest) -> UUID:
        validate_controls_request(request)
        controls = [control.model_dump() for control in request.controls]
        return await self.apply_partial_update(
            request.character_name, request.game, CONTROLS_KEY, controls
        )
