"""Logging utilities for kvstore using Loguru.

kvstore is a library, so its logging is disabled on import. Applications
opt in with one of:
- enable_library_logging(): plain text to stderr at the given level
- setup_logging(): sink chosen by a LoggingConfig (stderr or a rotated file, text or json)
"""

import sys
from pathlib import Path
from typing import Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from kvstore.constants import APP_NAME

from .models import AppInfo


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=False)
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_file: str | None = Field(default=None)
    rotation: str = Field(default="1 MB")
    retention: str = Field(default="7 days")
    format: Literal["json", "text"] = Field(default="text")


def setup_logging(app_info: AppInfo, config: LoggingConfig) -> int | None:
    """Configure the kvstore sink from a LoggingConfig.

    Returns the loguru handler id, or None when logging stays disabled.
    """
    if not config.enabled:
        disable_library_logging()
        return None

    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "global", "env": app_info.environment})

    diagnose = app_info.environment == "dev"
    serialize = config.format == "json"

    if config.log_file:
        log_file = Path(config.log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler_id = logger.add(
            log_file,
            level=config.log_level,
            rotation=config.rotation,
            retention=config.retention,
            serialize=serialize,
            format="{message}" if serialize else _get_text_format(),
            diagnose=diagnose,
        )
    else:
        handler_id = logger.add(
            sys.stderr,
            level=config.log_level,
            serialize=serialize,
            format="{message}" if serialize else _get_text_format(),
            colorize=False,
            diagnose=diagnose,
        )

    logger.debug(
        "Logging initialized",
        log_file=config.log_file,
        level=config.log_level,
        format=config.format,
    )

    return handler_id


def disable_library_logging() -> None:
    logger.disable(APP_NAME)


def enable_library_logging(level: str = "INFO") -> int:
    logger.enable(APP_NAME)
    logger.remove()

    handler_id = logger.add(
        sys.stderr,
        level=level,
        format=_get_text_format(),
        colorize=False,
    )

    return handler_id


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)


def _get_text_format() -> str:
    return "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} | {extra}\n{exception}"
