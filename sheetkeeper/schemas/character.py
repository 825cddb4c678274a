from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ControlItem(BaseModel):
    num: int
    name: str
    type: str
    info: str = ""


class UpdateControlsRequest(BaseModel):
    character_name: str
    game: str
    controls: list[ControlItem] = []


class UpdateControlsResponse(BaseModel):
    success: bool = True
    character_uuid: UUID
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str | None = None
    error_details: dict[str, Any] | None = None
