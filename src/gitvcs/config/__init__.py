"""gitvcs configuration.

This module provides the configuration models and the loader that merges a
TOML file, GITVCS_* environment variables and explicit overrides.

Example:
    >>> from gitvcs.config import load_settings
    >>> settings = load_settings(include_env=False)
    >>> settings.logging.level
    <LogLevel.WARNING: 'warning'>
"""

from gitvcs.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._load import load_settings
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    GitClientConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    Settings,
    default_private_key_path,
)

__all__ = [
    "ENV_PREFIX",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "GitClientConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "Settings",
    "deep_merge",
    "default_private_key_path",
    "load_settings",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
