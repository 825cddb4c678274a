import re
from pathlib import Path

from sheetkeeper.core.error import DomainErrorCode, SheetDomainError

IN_MEMORY = ":memory:"

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^A-Za-z0-9_.-]")


def sanitize_store_name(name: str) -> str:
    """Reduce a character or user name to a safe file stem.

    Whitespace runs become a single underscore, anything outside
    ``[A-Za-z0-9_.-]`` is dropped and leading dots are stripped so the
    result can never be hidden or climb out of its directory.
    """
    stem = _WHITESPACE.sub("_", name.strip())
    stem = _DISALLOWED.sub("", stem)
    stem = stem.lstrip(".")

    if not stem:
        raise SheetDomainError(
            code=DomainErrorCode.VALIDATION_FAILED,
            message="Store name has no usable characters",
            details={"name": name},
        )
    return stem


def build_store_path(base_dir: str | Path, name: str, suffix: str = ".db") -> Path:
    stem = sanitize_store_name(name)
    if stem.endswith(suffix):
        stem = stem[: -len(suffix)]
    return Path(base_dir) / f"{stem}{suffix}"


def build_database_uri(location: str | Path) -> str:
    if str(location) == IN_MEMORY:
        return f"sqlite+aiosqlite:///{IN_MEMORY}"
    return f"sqlite+aiosqlite:///{Path(location).as_posix()}"
