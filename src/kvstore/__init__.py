"""kvstore - key-value storage with in-memory, directory and JSON file backends.

By default, kvstore's internal logging is disabled when used as a library.
Library users can enable logging by calling kvstore.enable_logging().
"""

from kvstore.common import disable_library_logging, enable_library_logging
from kvstore.store import (
    DirectoryStore,
    ErrorKind,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    StoreConfig,
    StoreError,
    StoreHaltedError,
    StoreKeyNotFoundError,
    StoreUnauthorizedError,
    StoreUnreachableError,
    open_store,
)

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "DirectoryStore",
    "ErrorKind",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "StoreConfig",
    "StoreError",
    "StoreHaltedError",
    "StoreKeyNotFoundError",
    "StoreUnauthorizedError",
    "StoreUnreachableError",
    "enable_logging",
    "open_store",
]
