"""Environment variable reader with dependency injection support.

Every SCANRELAY_* variable is read through EnvReader so that tests can
inject a plain mapping instead of touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "SCANRELAY_CONFIG_PATH"
ENV_LOG_LEVEL = "SCANRELAY_LOG_LEVEL"
ENV_LOG_FORMAT = "SCANRELAY_LOG_FORMAT"
ENV_LOG_FILE = "SCANRELAY_LOG_FILE"
ENV_LOG_STDERR = "SCANRELAY_LOG_STDERR"


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"SCANRELAY_LOG_LEVEL": "debug"})
        reader.get_str("SCANRELAY_LOG_LEVEL")  # "debug"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string, treating blank values as unset."""
        value = self._env.get(var)
        if value is None or not value.strip():
            return default
        return value.strip()

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean.

        "true", "1", "yes" and "on" (case-insensitive) are true; any
        other non-empty value is false.
        """
        value = self.get_str(var)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def get_path(
        self, var: str, must_exist: bool = False, default: Path | None = None
    ) -> Path | None:
        """Get a path with tilde expansion.

        Args:
            var: Environment variable name.
            must_exist: If True, return default (with a warning) when the
                path does not exist.
            default: Value used when unset.
        """
        value = self.get_str(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path
