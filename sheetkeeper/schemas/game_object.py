from typing import Any

from pydantic import BaseModel


class OwnedObject(BaseModel):
    object_id: int
    name: str
    type: str
    quantity: int
    properties: dict[str, Any] | None = None
