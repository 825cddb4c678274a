import asyncio
import logging
import sys

import uvicorn

from sheetkeeper.core.config import settings
from sheetkeeper.db.schema import initialize, initialize_named

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def start_dev_server() -> None:
    logger.info("Starting development server with reload")
    uvicorn.run(
        "sheetkeeper.main:app", host=settings.HOST, port=settings.PORT, reload=True
    )


def start_prod_server() -> None:
    logger.info(f"Starting API server on http://{settings.HOST}:{settings.PORT}")
    logger.info(f"  POST {settings.API_PREFIX}/character/controls")
    uvicorn.run("sheetkeeper.main:app", host=settings.HOST, port=settings.PORT)


async def _open_and_close(location: str) -> None:
    database = await initialize(location)
    await database.close()


async def _open_named_and_close(name: str) -> str:
    database = await initialize_named(settings.SAVES_DIR, name)
    await database.close()
    return database.location


def initialize_db() -> None:
    logger.info(f"Initializing database at {settings.DATABASE_PATH}")
    asyncio.run(_open_and_close(settings.DATABASE_PATH))
    logger.info("Database initialization completed")


def initialize_character_db() -> None:
    if len(sys.argv) < 2:
        logger.error("Character name is required")
        print("Error: Character name is required")
        print('Usage: init-character-db "Character Name"')
        sys.exit(1)

    name = sys.argv[1]
    location = asyncio.run(_open_named_and_close(name))
    logger.info(f"Character database ready at {location}")


def run_coverage() -> None:
    from pytest import main as pytest_main

    logger.info("Running test coverage")
    sys.exit(
        pytest_main(["--cov=sheetkeeper", "--cov-report=term-missing", "--no-cov-on-fail"]),
    )
