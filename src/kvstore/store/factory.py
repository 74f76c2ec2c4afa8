"""Construct a store from configuration."""

from __future__ import annotations

from typing import Any

from result import Ok, Result

from kvstore.common import create_logger
from kvstore.settings import get_settings

from .config import StoreConfig
from .directory import DirectoryStore
from .json_file import JsonFileStore
from .memory import MemoryStore
from .models import StoreError
from .protocol import KeyValueStore

logger = create_logger("store.factory")


def open_store(config: StoreConfig | None = None) -> Result[KeyValueStore[Any], StoreError]:
    """Open the backend described by config, or by the process settings when omitted."""
    if config is None:
        config = get_settings().store

    logger.debug("Opening store", backend=config.backend, directory=str(config.directory))

    match config.backend:
        case "memory":
            return Ok(MemoryStore())
        case "directory" if config.directory is not None:
            return DirectoryStore.open(config.directory)
        case "json_file" if config.directory is not None:
            return JsonFileStore.open(
                config.directory,
                config.name,
                indent=config.indent,
                on_corrupt=config.on_corrupt,
            )
        case _:
            raise ValueError(f"Unexpected store config: backend={config.backend} directory={config.directory}")
