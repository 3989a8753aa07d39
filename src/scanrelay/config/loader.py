"""Configuration loading and validation.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (applied by build_logging_config)
2. Environment variables (SCANRELAY_*)
3. Config file (~/.scanrelay/config.yml)
4. Default values

The YAML file is validated with Pydantic models and then converted into
the immutable dataclasses in scanrelay.config.models.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scanrelay.config.env import (
    ENV_CONFIG_PATH,
    ENV_LOG_FILE,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    ENV_LOG_STDERR,
    EnvReader,
)
from scanrelay.config.logging_factory import build_logging_config
from scanrelay.config.models import (
    VALID_VERBOSITY,
    AppConfig,
    JellyfinConfig,
    LoggingConfig,
)
from scanrelay.rewrite import RewriteRule

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".scanrelay"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yml"


class ConfigError(Exception):
    """Error loading or validating configuration."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class RewriteModel(BaseModel):
    """Pydantic model for a rewrite rule."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_: str = Field(alias="from")
    to: str


class JellyfinModel(BaseModel):
    """Pydantic model for a Jellyfin target entry."""

    model_config = ConfigDict(extra="forbid")

    url: str
    token: str
    user_id: str = ""
    library: str = ""
    precise_refresh: bool = False
    rewrite: list[RewriteModel] = Field(default_factory=list)
    verbosity: str = ""
    timeout_seconds: int = Field(default=30, ge=1, le=300)

    @field_validator("verbosity")
    @classmethod
    def validate_verbosity(cls, v: str) -> str:
        """Reject unknown verbosity names."""
        if v.lower() not in VALID_VERBOSITY:
            raise ValueError(f"unknown verbosity '{v}'")
        return v.lower()


class TargetsModel(BaseModel):
    """Pydantic model for the targets section."""

    model_config = ConfigDict(extra="forbid")

    jellyfin: list[JellyfinModel] = Field(default_factory=list)


class LoggingModel(BaseModel):
    """Pydantic model for the logging section."""

    model_config = ConfigDict(extra="forbid")

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = False
    max_bytes: int = Field(default=10_485_760, gt=0)
    backup_count: int = Field(default=5, ge=0)


class ConfigFileModel(BaseModel):
    """Pydantic model for the whole config file."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingModel = Field(default_factory=LoggingModel)
    targets: TargetsModel = Field(default_factory=TargetsModel)


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honouring SCANRELAY_CONFIG_PATH.

    A SCANRELAY_CONFIG_PATH that does not exist is logged and ignored.
    """
    reader = env_reader or EnvReader()
    return reader.get_path(ENV_CONFIG_PATH, must_exist=True) or DEFAULT_CONFIG_FILE


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Turn the first Pydantic error into a message and dotted field path."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    return f"{field}: {first['msg']}" if field else first["msg"], field


def parse_config(data: dict[str, Any] | None) -> AppConfig:
    """Validate raw config data and build an AppConfig.

    Args:
        data: Parsed YAML mapping (None is treated as empty).

    Returns:
        Validated AppConfig.

    Raises:
        ConfigError: If the data does not match the schema.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping at the top level")

    try:
        model = ConfigFileModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise ConfigError(f"Invalid configuration: {message}", field) from e

    try:
        logging_config = LoggingConfig(**model.logging.model_dump())
    except ValueError as e:
        raise ConfigError(f"Invalid logging configuration: {e}", "logging") from e

    targets: list[JellyfinConfig] = []
    for index, entry in enumerate(model.targets.jellyfin):
        values = entry.model_dump(exclude={"rewrite"})
        rules = tuple(RewriteRule(from_=r.from_, to=r.to) for r in entry.rewrite)
        try:
            targets.append(JellyfinConfig(rewrite=rules, **values))
        except ValueError as e:
            raise ConfigError(
                f"Invalid jellyfin target #{index}: {e}",
                f"targets.jellyfin.{index}",
            ) from e

    return AppConfig(logging=logging_config, jellyfin=tuple(targets))


def load_config_file(path: Path) -> AppConfig:
    """Load and validate a YAML config file.

    A missing file yields the default (target-less) configuration.

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("Config file %s not found, using defaults", path)
        return AppConfig()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return parse_config(data)


def get_config(
    config_path: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
) -> AppConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides SCANRELAY_CONFIG_PATH).
        env_reader: Optional EnvReader for testing.

    Returns:
        AppConfig with merged configuration.

    Raises:
        ConfigError: If the config file or any override is invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    config = load_config_file(path)

    try:
        config.logging = build_logging_config(
            config.logging,
            level=reader.get_str(ENV_LOG_LEVEL),
            file=reader.get_path(ENV_LOG_FILE),
            format=reader.get_str(ENV_LOG_FORMAT),
            include_stderr=reader.get_bool(ENV_LOG_STDERR),
        )
    except ValueError as e:
        raise ConfigError(
            f"Invalid logging environment override: {e}", "logging"
        ) from e

    return config
