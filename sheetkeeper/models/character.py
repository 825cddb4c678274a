from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from sheetkeeper.models.time_stamp_mixin import TimeStampMixin


class Character(TimeStampMixin, SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "characters"

    name: str = Field(primary_key=True)
    game: str = Field(primary_key=True)
    uuid: UUID = Field(
        default_factory=uuid4,
        unique=True,
        index=True,
    )
    # Raw JSON text; parsed only at the merge boundary.
    data: str | None = Field(default=None)
