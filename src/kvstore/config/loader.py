"""Store configuration file loading and validation."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result

from kvstore.common import create_logger
from kvstore.store.config import StoreConfig

from .models import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigValidationError,
    ConfigYamlError,
)

logger = create_logger("config")

STORE_SECTION = "store"


def load_config_file(path: Path) -> Result[StoreConfig, ConfigError]:
    """Load a StoreConfig from a YAML file.

    The file may either nest the settings under a ``store:`` section or hold
    them at the top level. An empty file yields the default config.
    """
    logger.debug("Loading store config", path=str(path))

    if not path.exists() or not path.is_file():
        return Err(
            ConfigNotFoundError(
                expected_path=path,
                message=f"Configuration file not found: {path}",
            ),
        )

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        return Err(ConfigIOError(path=path, message=str(exc)))

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = getattr(mark, "line", None)
        column = getattr(mark, "column", None)
        return Err(
            ConfigYamlError(
                path=path,
                line=(line + 1) if line is not None else None,
                column=(column + 1) if column is not None else None,
                message=str(exc),
            ),
        )

    if data is None:
        data = {}

    if not isinstance(data, dict):
        return Err(
            ConfigValidationError(
                path=path,
                message="Configuration root must be a mapping of keys to values.",
            ),
        )

    section = data.get(STORE_SECTION, data)
    if section is None:
        section = {}

    try:
        config = StoreConfig.model_validate(section)
    except ValidationError as exc:
        error_details = exc.errors()
        field = None
        message = str(exc)
        if error_details:
            first = error_details[0]
            loc = first.get("loc") or ()
            field = ".".join(str(part) for part in loc) or None
            message = first.get("msg", message)
        logger.debug("Store config rejected", path=str(path), field=field, error=message)
        return Err(ConfigValidationError(path=path, field=field, message=message))

    return Ok(config)
