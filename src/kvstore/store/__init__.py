"""kvstore store backends."""

from .config import StoreConfig
from .directory import DirectoryStore
from .factory import open_store
from .json_file import JsonFileStore
from .locks import ReadWriteLock
from .memory import MemoryStore
from .models import (
    ErrorKind,
    StoreError,
    StoreHaltedError,
    StoreKeyNotFoundError,
    StoreUnauthorizedError,
    StoreUnreachableError,
)
from .protocol import KeyValueStore

__all__ = [
    "DirectoryStore",
    "ErrorKind",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "ReadWriteLock",
    "StoreConfig",
    "StoreError",
    "StoreHaltedError",
    "StoreKeyNotFoundError",
    "StoreUnauthorizedError",
    "StoreUnreachableError",
    "open_store",
]
