from sheetkeeper.core.config import settings
from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.db.database import Database
from sheetkeeper.db.schema import initialize

_database: Database | None = None


async def init_db(location: str | None = None) -> Database:
    global _database
    if _database is None:
        _database = await initialize(location or settings.DATABASE_PATH)
    return _database


async def close_db() -> None:
    global _database
    if _database is not None:
        await _database.close()
        _database = None


def get_database() -> Database:
    if _database is None:
        raise SheetDomainError(
            code=DomainErrorCode.STORAGE_UNAVAILABLE,
            message="Database has not been initialized",
        )
    return _database
