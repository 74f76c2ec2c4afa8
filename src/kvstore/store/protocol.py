"""Key-value store protocol."""

from __future__ import annotations

from typing import Protocol, TypeVar

from result import Result

from .models import StoreError

V = TypeVar("V")


class KeyValueStore(Protocol[V]):
    """Protocol shared by every store backend.

    A store is usable from construction until close() or purge(). After
    either, every operation returns a halted error.
    """

    def set(self, key: str, value: V) -> Result[None, StoreError]:
        """Insert or overwrite the value for key."""
        ...

    def get(self, key: str) -> Result[V, StoreError]:
        """Return the value for key, or a not-found error."""
        ...

    def delete(self, key: str) -> Result[None, StoreError]:
        """Remove key. Removing an absent key succeeds."""
        ...

    def clear(self) -> Result[None, StoreError]:
        """Remove all keys, keeping the store usable."""
        ...

    def keys(self) -> Result[list[str], StoreError]: ...

    def close(self) -> Result[None, StoreError]:
        """Release the backing resource. Persisted data survives."""
        ...

    def purge(self) -> Result[None, StoreError]:
        """Delete all persisted data and release the backing resource."""
        ...
