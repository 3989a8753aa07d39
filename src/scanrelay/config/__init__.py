"""Configuration management for scanrelay.

Precedence (highest to lowest): CLI flags, SCANRELAY_* environment
variables, the YAML config file, built-in defaults.
"""

from scanrelay.config.env import EnvReader
from scanrelay.config.loader import (
    ConfigError,
    get_config,
    get_default_config_path,
    load_config_file,
    parse_config,
)
from scanrelay.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from scanrelay.config.models import AppConfig, JellyfinConfig, LoggingConfig

__all__ = [
    # Models
    "AppConfig",
    "JellyfinConfig",
    "LoggingConfig",
    # Loader
    "ConfigError",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "parse_config",
    # Environment and logging
    "EnvReader",
    "build_logging_config",
    "configure_logging_from_cli",
]
