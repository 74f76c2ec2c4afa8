"""Directory-based store implementation: one file per key."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from types import TracebackType

from result import Err, Ok, Result

from kvstore.common import create_logger

from .models import StoreError, StoreHaltedError, closed_error, error_from_os_error

logger = create_logger("store.directory")

_RESERVED_KEYS = {"", ".", ".."}


class DirectoryStore:
    """Stores each value verbatim in ``<directory>/<key>``.

    There is no in-process locking. Concurrent operations on the same key
    race at the filesystem level.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._closed = False

    @classmethod
    def open(cls, directory: Path | str) -> Result[DirectoryStore, StoreError]:
        path = Path(directory)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = error_from_os_error(e, operation="open")
            logger.debug("Failed to open directory store", directory=str(path), error=error.message)
            return Err(error)

        logger.debug("Directory store opened", directory=str(path))
        return Ok(cls(path))

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, key: str, value: bytes | bytearray | memoryview) -> Result[None, StoreError]:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            return Err(
                StoreHaltedError(
                    operation="set",
                    key=key,
                    message=f"Value must be bytes-like, got {type(value).__name__}",
                )
            )
        return self._key_path("set", key).and_then(lambda path: self._write(key, path, value))

    def get(self, key: str) -> Result[bytes, StoreError]:
        return self._key_path("get", key).and_then(lambda path: self._read(key, path))

    def delete(self, key: str) -> Result[None, StoreError]:
        return self._key_path("delete", key).and_then(lambda path: self._unlink(key, path))

    def clear(self) -> Result[None, StoreError]:
        if self._closed:
            return Err(closed_error("clear"))
        try:
            shutil.rmtree(self._directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            return self._fail(e, operation="clear")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return self._fail(e, operation="clear")
        return Ok(None)

    def keys(self) -> Result[list[str], StoreError]:
        if self._closed:
            return Err(closed_error("keys"))
        try:
            return Ok([entry.name for entry in self._directory.iterdir() if entry.is_file()])
        except OSError as e:
            return self._fail(e, operation="keys")

    def close(self) -> Result[None, StoreError]:
        self._closed = True
        logger.debug("Directory store closed", directory=str(self._directory))
        return Ok(None)

    def purge(self) -> Result[None, StoreError]:
        self._closed = True
        try:
            shutil.rmtree(self._directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            return self._fail(e, operation="purge")
        logger.debug("Directory store purged", directory=str(self._directory))
        return Ok(None)

    def _key_path(self, operation: str, key: str) -> Result[Path, StoreError]:
        if self._closed:
            return Err(closed_error(operation, key))
        if not _is_valid_key(key):
            return Err(StoreHaltedError(operation=operation, key=key, message=f"Invalid key '{key}'"))
        return Ok(self._directory / key)

    def _write(self, key: str, path: Path, value: bytes | bytearray | memoryview) -> Result[None, StoreError]:
        try:
            path.write_bytes(value)
        except OSError as e:
            return self._fail(e, operation="set", key=key)
        return Ok(None)

    def _read(self, key: str, path: Path) -> Result[bytes, StoreError]:
        try:
            return Ok(path.read_bytes())
        except OSError as e:
            return self._fail(e, operation="get", key=key, lookup=True)

    def _unlink(self, key: str, path: Path) -> Result[None, StoreError]:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            return self._fail(e, operation="delete", key=key)
        return Ok(None)

    def _fail(self, exc: OSError, *, operation: str, key: str | None = None, lookup: bool = False) -> Err[StoreError]:
        error = error_from_os_error(exc, operation=operation, key=key, lookup=lookup)
        logger.debug(
            "Directory store operation failed",
            operation=operation,
            key=key,
            kind=error.kind.value,
            error=error.message,
        )
        return Err(error)

    def __enter__(self) -> DirectoryStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _is_valid_key(key: str) -> bool:
    """A key must name a single file directly inside the store directory."""
    separators = {os.sep, os.altsep} - {None}
    if key in _RESERVED_KEYS or "\0" in key or any(sep in key for sep in separators):
        return False
    try:
        os.fsencode(key)
    except UnicodeEncodeError:
        return False
    return True
