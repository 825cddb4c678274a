from fastapi import Depends

from sheetkeeper.db.database import Database
from sheetkeeper.db.session import get_database
from sheetkeeper.services.character_service import CharacterService


def get_character_service(
    database: Database = Depends(get_database),
) -> CharacterService:
    return CharacterService(database)
