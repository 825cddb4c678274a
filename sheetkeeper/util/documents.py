import json
from typing import Any

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError


def load_document(raw: str | None, **context: Any) -> dict[str, Any]:
    """Parse a stored character payload; an absent payload is an empty document."""
    if raw is None:
        return {}

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SheetDomainError(
            code=DomainErrorCode.CORRUPT_PAYLOAD,
            message="Stored character data is not valid JSON",
            details={**context, "reason": str(exc)},
        ) from exc

    if not isinstance(document, dict):
        raise SheetDomainError(
            code=DomainErrorCode.CORRUPT_PAYLOAD,
            message="Stored character data is not a JSON object",
            details={**context, "reason": f"found {type(document).__name__}"},
        )

    return document


def merge_field(document: dict[str, Any], key: str, value: Any) -> dict[str, Any]:
    merged = dict(document)
    merged[key] = value
    return merged


def dump_document(document: dict[str, Any], max_bytes: int | None = None) -> str:
    try:
        raw = json.dumps(document, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SheetDomainError(
            code=DomainErrorCode.VALIDATION_FAILED,
            message="Character data is not JSON serializable",
            details={"reason": str(exc)},
        ) from exc

    if max_bytes is not None:
        size = len(raw.encode("utf-8"))
        if size > max_bytes:
            raise SheetDomainError(
                code=DomainErrorCode.DOCUMENT_TOO_LARGE,
                message=f"Character data exceeds maximum size of {max_bytes} bytes",
                details={"size": size, "max_bytes": max_bytes},
            )

    return raw
