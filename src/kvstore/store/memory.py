"""In-memory store implementation."""

from __future__ import annotations

from types import TracebackType
from typing import Generic, TypeVar

from result import Err, Ok, Result

from kvstore.common import create_logger

from .locks import ReadWriteLock
from .models import StoreError, StoreKeyNotFoundError, closed_error

logger = create_logger("store.memory")

V = TypeVar("V")


class MemoryStore(Generic[V]):
    """Dict-backed implementation of KeyValueStore protocol. Nothing is persisted."""

    def __init__(self) -> None:
        self._data: dict[str, V] = {}
        self._lock = ReadWriteLock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, key: str, value: V) -> Result[None, StoreError]:
        with self._lock.write_locked():
            if self._closed:
                return Err(closed_error("set", key))
            self._data[key] = value
            return Ok(None)

    def get(self, key: str) -> Result[V, StoreError]:
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
            self._data.pop(key, None)
            return Ok(None)

    def clear(self) -> Result[None, StoreError]:
        with self._lock.write_locked():
            if self._closed:
                return Err(closed_error("clear"))
            self._data.clear()
            return Ok(None)

    def keys(self) -> Result[list[str], StoreError]:
        with self._lock.read_locked():
            if self._closed:
                return Err(closed_error("keys"))
            return Ok(list(self._data))

    def close(self) -> Result[None, StoreError]:
        # Cleared in place so every holder of this instance sees an empty, closed store.
        with self._lock.write_locked():
            self._data.clear()
            self._closed = True
        logger.debug("Memory store closed")
        return Ok(None)

    def purge(self) -> Result[None, StoreError]:
        return self.close()

    def __enter__(self) -> MemoryStore[V]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
