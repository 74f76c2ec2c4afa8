"""Common models and types used across kvstore modules."""

from .fields import JsonValue
from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_logging
from .models import AppInfo

__all__ = [
    "AppInfo",
    "JsonValue",
    "LoggingConfig",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "setup_logging",
]
