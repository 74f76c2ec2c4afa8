"""Single JSON file store implementation."""

from __future__ import annotations

import json
from pathlib import Path
from types import TracebackType
from typing import Literal, TextIO, TypeAlias

from result import Err, Ok, Result, is_err

from kvstore.common import JsonValue, create_logger
from kvstore.constants import JSON_SUFFIX

from .locks import ReadWriteLock
from .models import (
    StoreError,
    StoreHaltedError,
    StoreKeyNotFoundError,
    closed_error,
    error_from_os_error,
)

logger = create_logger("store.json_file")

CorruptPolicy: TypeAlias = Literal["reset", "fail"]

EMPTY_DOCUMENT = "{}"


class JsonFileStore:
    """Key-value store mirrored to a single JSON object on disk.

    The in-memory dict is the source of truth for the lifetime of the store;
    the file is read once on open and rewritten in full after every mutation.
    Every rewrite starts at offset 0 and truncates, so the file always holds
    exactly one serialization of the current mapping. Writes are not fsync'd.

    Opening two stores on the same path is unsupported.
    """

    def __init__(self, path: Path, handle: TextIO, data: dict[str, JsonValue], indent: int | None = None) -> None:
        self._path = path
        self._handle = handle
        self._data = data
        self._indent = indent
        self._lock = ReadWriteLock()
        self._closed = False

    @classmethod
    def open(
        cls,
        directory: Path | str,
        name: str,
        *,
        indent: int | None = None,
        on_corrupt: CorruptPolicy = "reset",
    ) -> Result[JsonFileStore, StoreError]:
        """Open or create ``<directory>/<name>.json``.

        An empty or unreadable file starts the store empty. Content that is not
        a JSON object is handled per ``on_corrupt``: "reset" overwrites it with
        ``{}`` and starts empty, "fail" returns a halted error and leaves the
        file untouched.
        """
        directory = Path(directory)
        if not name.endswith(JSON_SUFFIX):
            name += JSON_SUFFIX
        path = directory / name

        try:
            directory.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)
            handle = path.open("r+", encoding="utf-8")
        except OSError as e:
            error = error_from_os_error(e, operation="open")
            logger.debug("Failed to open JSON store", path=str(path), kind=error.kind.value, error=error.message)
            return Err(error)

        load_result = _load_document(handle, path, on_corrupt)
        if is_err(load_result):
            handle.close()
            logger.debug("Refusing to open corrupt JSON store", path=str(path), error=load_result.unwrap_err().message)
            return load_result

        data = load_result.unwrap()
        if data is None:
            reset_result = _rewrite(handle, EMPTY_DOCUMENT, operation="open")
            if is_err(reset_result):
                handle.close()
                return reset_result
            data = {}

        logger.debug("JSON store opened", path=str(path), keys=len(data))
        return Ok(cls(path, handle, data, indent=indent))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, key: str, value: JsonValue) -> Result[None, StoreError]:
        with self._lock.write_locked():
            if self._closed:
                return Err(closed_error("set", key))

            try:
                # Stored as it will read back after a reload, and detached from the caller's object.
                stored = json.loads(json.dumps(value))
            except (TypeError, ValueError) as e:
                return self._fail(
                    StoreHaltedError(operation="set", key=key, message=f"Failed to encode value: {e}")
                )

            result = self._persist({**self._data, key: stored}, operation="set", key=key)
            if is_err(result):
                return result

            self._data[key] = stored
            return Ok(None)

    def get(self, key: str) -> Result[JsonValue, StoreError]:
        with self._lock.read_locked():
            if self._closed:
                return Err(closed_error("get", key))
            if key not in self._data:
                return Err(StoreKeyNotFoundError(operation="get", key=key, message=f"Key '{key}' not found"))
            return Ok(self._data[key])

    def delete(self, key: str) -> Result[None, StoreError]:
        with self._lock.write_locked():
            if self._closed:
                return Err(closed_error("delete", key))
            if key not in self._data:
                return Ok(None)

            remaining = {k: v for k, v in self._data.items() if k != key}
            result = self._persist(remaining, operation="delete", key=key)
            if is_err(result):
                return result

            del self._data[key]
            return Ok(None)

    def clear(self) -> Result[None, StoreError]:
        with self._lock.write_locked():
            if self._closed:
                return Err(closed_error("clear"))

            result = self._persist({}, operation="clear")
            if is_err(result):
                return result

            self._data.clear()
            return Ok(None)

    def keys(self) -> Result[list[str], StoreError]:
        with self._lock.read_locked():
            if self._closed:
                return Err(closed_error("keys"))
            return Ok(list(self._data))

    def close(self) -> Result[None, StoreError]:
        with self._lock.write_locked():
            if self._closed:
                return Ok(None)

            self._closed = True
            self._data.clear()
            try:
                self._handle.close()
            except OSError as e:
                return self._fail(StoreHaltedError(operation="close", message=f"Failed to close store file: {e}"))

        logger.debug("JSON store closed", path=str(self._path))
        return Ok(None)

    def purge(self) -> Result[None, StoreError]:
        """Delete the store file and close the store.

        Every step is attempted even if an earlier one fails; the first
        failure is returned.
        """
        errors: list[StoreError] = []
        with self._lock.write_locked():
            self._data.clear()
            if not self._handle.closed:
                try:
                    self._handle.close()
                except OSError as e:
                    errors.append(StoreHaltedError(operation="purge", message=f"Failed to close store file: {e}"))
            self._closed = True

            try:
                self._path.unlink(missing_ok=True)
            except OSError as e:
                errors.append(StoreHaltedError(operation="purge", message=f"Failed to remove store file: {e}"))

        if errors:
            for error in errors[1:]:
                logger.debug("Additional purge failure", path=str(self._path), error=error.message)
            return self._fail(errors[0])

        logger.debug("JSON store purged", path=str(self._path))
        return Ok(None)

    def _persist(
        self,
        data: dict[str, JsonValue],
        *,
        operation: str,
        key: str | None = None,
    ) -> Result[None, StoreError]:
        try:
            content = json.dumps(data, indent=self._indent, ensure_ascii=False)
            # Lone surrogates survive json.dumps but not the UTF-8 handle; reject before touching the file.
            content.encode("utf-8")
        except (TypeError, ValueError) as e:
            return self._fail(StoreHaltedError(operation=operation, key=key, message=f"Failed to encode data: {e}"))

        result = _rewrite(self._handle, content, operation=operation, key=key)
        if is_err(result):
            return self._fail(result.unwrap_err())
        return Ok(None)

    def _fail(self, error: StoreError) -> Err[StoreError]:
        logger.debug(
            "JSON store operation failed",
            path=str(self._path),
            operation=error.operation,
            key=error.key,
            kind=error.kind.value,
            error=error.message,
        )
        return Err(error)

    def __enter__(self) -> JsonFileStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _load_document(
    handle: TextIO,
    path: Path,
    on_corrupt: CorruptPolicy,
) -> Result[dict[str, JsonValue] | None, StoreError]:
    """Read the store document. Ok(None) means the file must be reset to ``{}``."""
    try:
        content = handle.read()
    except UnicodeDecodeError as e:
        return _corrupt(path, on_corrupt, f"File is not valid UTF-8: {e}")
    except OSError as e:
        logger.warning("Store file unreadable, starting empty", path=str(path), error=str(e))
        return Ok(None)

    if not content.strip():
        return Ok(None)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return _corrupt(path, on_corrupt, f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return _corrupt(path, on_corrupt, f"Expected a JSON object, got {type(data).__name__}")

    return Ok(data)


def _corrupt(path: Path, on_corrupt: CorruptPolicy, reason: str) -> Result[dict[str, JsonValue] | None, StoreError]:
    if on_corrupt == "fail":
        return Err(StoreHaltedError(operation="open", message=f"Corrupt store file {path}: {reason}"))
    logger.warning("Corrupt store file reset to empty", path=str(path), reason=reason)
    return Ok(None)


def _rewrite(handle: TextIO, content: str, *, operation: str, key: str | None = None) -> Result[None, StoreError]:
    try:
        handle.seek(0)
        handle.write(content)
        handle.truncate()
        handle.flush()
    except OSError as e:
        return Err(StoreHaltedError(operation=operation, key=key, message=f"Failed to write store file: {e}"))
    return Ok(None)
