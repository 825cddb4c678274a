from enum import Enum
from typing import Any


class DomainErrorCode(str, Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    FOREIGN_KEY_VIOLATION = "FOREIGN_KEY_VIOLATION"
    CORRUPT_PAYLOAD = "CORRUPT_PAYLOAD"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    CHARACTER_NOT_FOUND = "CHARACTER_NOT_FOUND"
    OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"
    DOCUMENT_TOO_LARGE = "DOCUMENT_TOO_LARGE"


class SheetDomainError(Exception):
    def __init__(
        self,
        code: DomainErrorCode,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message or code.name
        self.details = details or {}
        super().__init__(self.message)
