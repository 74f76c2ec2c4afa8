"""kvstore configuration file loading."""

from .loader import load_config_file
from .models import ConfigError, ConfigIOError, ConfigNotFoundError, ConfigValidationError, ConfigYamlError

__all__ = [
    "ConfigError",
    "ConfigIOError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "ConfigYamlError",
    "load_config_file",
]
