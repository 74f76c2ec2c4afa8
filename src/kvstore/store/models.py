"""Store error models."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator


class ErrorKind(str, Enum):
    """Category of a store failure."""

    UNAUTHORIZED = "unauthorized"
    HALTED = "halted"
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"


class StoreError(BaseModel):
    """Base store error."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ErrorKind
    operation: str
    key: str | None = None
    message: str

    @field_validator("key", "message", mode="before")
    @classmethod
    def escape_unencodable_text(cls, value: object) -> object:
        # Keys may carry lone surrogates that pydantic rejects as strings.
        if isinstance(value, str):
            return value.encode("utf-8", "backslashreplace").decode("utf-8")
        return value


class StoreUnauthorizedError(StoreError):
    """Permission denied on the backing resource."""

    kind: Literal[ErrorKind.UNAUTHORIZED] = ErrorKind.UNAUTHORIZED


class StoreHaltedError(StoreError):
    """Unrecoverable I/O or encoding failure, or use of a closed store."""

    kind: Literal[ErrorKind.HALTED] = ErrorKind.HALTED


class StoreKeyNotFoundError(StoreError):
    """Key not found in store."""

    kind: Literal[ErrorKind.NOT_FOUND] = ErrorKind.NOT_FOUND
    key: str


class StoreUnreachableError(StoreError):
    """Backing service cannot be reached. No local backend returns this."""

    kind: Literal[ErrorKind.UNREACHABLE] = ErrorKind.UNREACHABLE


def error_from_os_error(
    exc: OSError,
    *,
    operation: str,
    key: str | None = None,
    lookup: bool = False,
) -> StoreError:
    """Classify an OSError into the store error taxonomy.

    A missing file is only NOT_FOUND for a key lookup. Anywhere else a
    missing path means the backing resource is gone and the store halts.
    """
    message = f"{operation} failed: {exc}"
    if isinstance(exc, PermissionError):
        return StoreUnauthorizedError(operation=operation, key=key, message=message)
    if lookup and key is not None and isinstance(exc, FileNotFoundError):
        return StoreKeyNotFoundError(operation=operation, key=key, message=f"Key '{key}' not found")
    return StoreHaltedError(operation=operation, key=key, message=message)


def closed_error(operation: str, key: str | None = None) -> StoreHaltedError:
    return StoreHaltedError(operation=operation, key=key, message="Store is closed")
