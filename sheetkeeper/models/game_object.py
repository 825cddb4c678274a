from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from sheetkeeper.models.time_stamp_mixin import TimeStampMixin


class GameObject(TimeStampMixin, SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "objects"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    type: str
    properties: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON(none_as_null=True), nullable=True),
    )
