import logging
from abc import ABC
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import BinaryExpression, Select
from sqlmodel import SQLModel

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError

T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


def integrity_error_to_domain(
    exc: IntegrityError, model_name: str, conditions: dict[str, Any]
) -> SheetDomainError:
    reason = str(exc.orig)
    if "FOREIGN KEY" in reason:
        code = DomainErrorCode.FOREIGN_KEY_VIOLATION
        message = f"{model_name} references a missing record"
    elif "UNIQUE" in reason:
        code = DomainErrorCode.DUPLICATE_KEY
        message = f"{model_name} already exists"
    else:
        raise exc

    logger.info(f"{model_name} write rejected: {reason}")
    return SheetDomainError(
        code=code,
        message=message,
        details={"model": model_name, "conditions": conditions, "reason": reason},
    )


class BaseRepository(Generic[T], ABC):
    def __init__(
        self,
        session: AsyncSession,
        model_class: type[T],
        not_found_error_code: DomainErrorCode,
    ):
        self.session = session
        self.model_class = model_class
        self.not_found_error_code = not_found_error_code

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise integrity_error_to_domain(
                exc, self.model_class.__name__, entity.model_dump(mode="json")
            ) from exc
        await self.session.refresh(entity)
        return entity

    def _where(self, query: Any, *filters: BinaryExpression, **kwargs: Any) -> Any:
        for filter_condition in filters:
            query = query.where(filter_condition)

        for key, value in kwargs.items():
            if hasattr(self.model_class, key):
                query = query.where(getattr(self.model_class, key) == value)

        return query

    def _build_query(self, *filters: BinaryExpression, **kwargs: Any) -> Select:
        return cast(Select, self._where(select(self.model_class), *filters, **kwargs))

    async def filter(
        self,
        *filters: BinaryExpression,
        offset: int | None = None,
        limit: int | None = None,
        **kwargs: Any,
    ) -> list[T]:
        query = self._build_query(*filters, **kwargs)

        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def filter_one(self, *filters: BinaryExpression, **kwargs: Any) -> T | None:
        query = self._build_query(*filters, **kwargs)
        query = query.limit(1)

        result = await self.session.execute(query)
        return cast(T | None, result.scalar_one_or_none())

    async def filter_one_or_raise(self, *filters: BinaryExpression, **kwargs: Any) -> T:
        result = await self.filter_one(*filters, **kwargs)
        if not result:
            filter_details = {key: str(value) for key, value in kwargs.items()}
            raise SheetDomainError(
                code=self.not_found_error_code,
                message=f"{self.model_class.__name__} not found",
                details={
                    "model": self.model_class.__name__,
                    "filters": str(filters) if filters else None,
                    "conditions": filter_details,
                },
            )
        return result

    async def count(self, *filters: BinaryExpression, **kwargs: Any) -> int:
        query = self._where(
            select(func.count()).select_from(self.model_class), *filters, **kwargs
        )
        result = await self.session.execute(query)
        return cast(int, result.scalar_one())

    async def update_where(self, values: dict[str, Any], **kwargs: Any) -> int:
        stmt = self._where(update(self.model_class), **kwargs).values(**values)
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise integrity_error_to_domain(
                exc, self.model_class.__name__, kwargs
            ) from exc
        return cast(CursorResult, result).rowcount

    async def delete_where(self, **kwargs: Any) -> int:
        stmt = self._where(delete(self.model_class), **kwargs)
        result = await self.session.execute(stmt)
        return cast(CursorResult, result).rowcount
