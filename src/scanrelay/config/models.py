"""Configuration data models.

This module defines dataclasses for scanrelay configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from scanrelay.rewrite import RewriteRule

# Accepted target verbosity values; "" means inherit the root level.
VALID_VERBOSITY = frozenset({"", "trace", "debug", "info", "warn", "warning", "error"})

_LOG_LEVELS = ("debug", "info", "warning", "error")
_LOG_FORMATS = ("text", "json")


@dataclass(frozen=True)
class LoggingConfig:
    """Process-wide logging settings.

    level and format are case-insensitive. file=None logs to stderr only;
    with a file, include_stderr also mirrors output to stderr. The file
    rotates at max_bytes, keeping backup_count old files.
    """

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = False
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        if self.level.casefold() not in _LOG_LEVELS:
            raise ValueError(
                f"Log level must be one of {', '.join(_LOG_LEVELS)}, "
                f"got {self.level!r}"
            )
        if self.format.casefold() not in _LOG_FORMATS:
            raise ValueError(
                f"Log format must be one of {', '.join(_LOG_FORMATS)}, "
                f"got {self.format!r}"
            )
        if self.max_bytes < 1 or self.backup_count < 0:
            raise ValueError("Log rotation needs max_bytes >= 1, backup_count >= 0")


@dataclass(frozen=True)
class JellyfinConfig:
    """Connection and behaviour settings for one Jellyfin target.

    Immutable: a target captures this once at construction and reads it
    from any number of threads afterwards.
    """

    url: str
    """Base URL of the server (e.g., "http://jellyfin:8096")."""

    token: str
    """API key sent as X-Emby-Token."""

    user_id: str = ""
    """User whose views are queried during precise refresh."""

    library: str = ""
    """Library name override for the view lookup; empty uses the resolved library."""

    precise_refresh: bool = False
    """Refresh the changed item directly before falling back to a library scan."""

    rewrite: tuple[RewriteRule, ...] = ()
    """Path rewrite rules, applied before library resolution."""

    verbosity: str = ""
    """Per-target log level (trace, debug, info, warn, error)."""

    timeout_seconds: int = 30
    """Request timeout in seconds (1-300)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.url.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        if not self.token or not self.token.strip():
            raise ValueError("Token is required")
        if " " in self.token:
            raise ValueError("Token must not contain whitespace")
        if self.precise_refresh and not self.user_id.strip():
            raise ValueError("user_id is required when precise_refresh is enabled")
        if self.verbosity.lower() not in VALID_VERBOSITY:
            raise ValueError(
                f"verbosity must be one of {sorted(VALID_VERBOSITY)}, "
                f"got {self.verbosity}"
            )
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")


@dataclass
class AppConfig:
    """Top-level configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # One entry per configured Jellyfin server
    jellyfin: tuple[JellyfinConfig, ...] = ()
