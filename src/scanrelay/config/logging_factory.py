"""Merge CLI logging options into the loaded logging configuration."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from scanrelay.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return base with every non-None override applied.

    The copy is validated again, so an invalid override raises ValueError.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> None:
    """Apply CLI overrides to base and configure process logging."""
    from scanrelay.logging import configure_logging

    configure_logging(build_logging_config(base, level=level, file=file, format=format))
