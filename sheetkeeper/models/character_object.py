from sqlalchemy import ForeignKeyConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel


class CharacterObject(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "character_objects"

    id: int | None = Field(default=None, primary_key=True)
    game: str
    character_name: str
    object_id: int = Field(foreign_key="objects.id", ondelete="CASCADE")
    quantity: int = Field(default=1)

    __table_args__ = (
        ForeignKeyConstraint(
            ["character_name", "game"],
            ["characters.name", "characters.game"],
            ondelete="CASCADE",
        ),
        UniqueConstraint("game", "character_name", "object_id"),
    )
