import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Database:
    """Single guarded handle to the store's one connection.

    Every read and write goes through :meth:`exclusive`, so at most one
    logical operation touches the session at a time. Waiters are not
    ordered and never time out.
    """

    def __init__(self, engine: AsyncEngine, location: str, created: bool = False):
        self.engine = engine
        self.location = location
        self.created = created
        self._session = AsyncSession(
            bind=engine,
            expire_on_commit=False,
            autoflush=False,
        )
        self._lock = asyncio.Lock()

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[AsyncSession]:
        async with self._lock:
            try:
                yield self._session
            except OperationalError as exc:
                await self._session.rollback()
                logger.error(f"Storage failure at {self.location}: {exc.orig}")
                raise SheetDomainError(
                    code=DomainErrorCode.STORAGE_UNAVAILABLE,
                    message="Storage is unavailable",
                    details={"location": self.location, "reason": str(exc.orig)},
                ) from exc
            except BaseException:
                await self._session.rollback()
                raise
            finally:
                self._session.expunge_all()

    async def with_exclusive_access(
        self, fn: Callable[[AsyncSession], Awaitable[T]]
    ) -> T:
        async with self.exclusive() as session:
            return await fn(session)

    async def close(self) -> None:
        async with self._lock:
            await self._session.close()
            await self.engine.dispose()
