import logging
from pathlib import Path
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.db.database import Database
from sheetkeeper.models.character import Character
from sheetkeeper.models.character_object import CharacterObject
from sheetkeeper.models.game_object import GameObject
from sheetkeeper.util.paths import IN_MEMORY, build_database_uri, build_store_path

logger = logging.getLogger(__name__)

TABLES = [
    Character.__table__,  # type: ignore[attr-defined]
    GameObject.__table__,  # type: ignore[attr-defined]
    CharacterObject.__table__,  # type: ignore[attr-defined]
]
TABLE_NAMES = {table.name for table in TABLES}


def _enable_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for(location: str) -> AsyncEngine:
    engine = create_async_engine(
        build_database_uri(location),
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


def _store_unavailable(location: str, exc: BaseException) -> SheetDomainError:
    logger.error(f"Cannot open database at {location}: {exc}")
    return SheetDomainError(
        code=DomainErrorCode.STORAGE_UNAVAILABLE,
        message=f"Cannot open database at {location}",
        details={"location": location, "reason": str(exc)},
    )


async def _existing_tables(conn: AsyncConnection) -> set[str]:
    result = await conn.execute(
        text("SELECT name FROM sqlite_master WHERE type='table'")
    )
    return {row[0] for row in result} & TABLE_NAMES


async def initialize(location: str | Path) -> Database:
    """Open the store at ``location``, creating its tables when it has none.

    A store holding only some of the tables is refused rather than patched.
    """
    location = str(location)
    in_memory = location == IN_MEMORY

    if not in_memory:
        try:
            Path(location).parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise _store_unavailable(location, exc) from exc

    engine = create_engine_for(location)
    present: set[str] = set()
    try:
        async with engine.begin() as conn:
            if not in_memory:
                present = await _existing_tables(conn)
            if not present:
                await conn.run_sync(SQLModel.metadata.create_all, tables=TABLES)
    except (OSError, DBAPIError) as exc:
        await engine.dispose()
        raise _store_unavailable(location, exc) from exc

    missing = sorted(TABLE_NAMES - present)
    if present and missing:
        await engine.dispose()
        logger.error(f"Database at {location} is missing tables {missing}")
        raise SheetDomainError(
            code=DomainErrorCode.STORAGE_UNAVAILABLE,
            message=f"Database at {location} has an incomplete schema",
            details={"location": location, "missing": missing},
        )

    if present:
        logger.info(f"Opening existing database at {location}")
    else:
        logger.info(f"Creating new database at {location}")

    return Database(engine, location, created=not present)


async def initialize_named(base_dir: str | Path, name: str) -> Database:
    return await initialize(build_store_path(base_dir, name))
