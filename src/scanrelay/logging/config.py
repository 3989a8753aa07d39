"""Logging configuration for scanrelay.

Provides configure_logging() to set up process logging from LoggingConfig
and get_target_logger() for per-target verbosity.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from scanrelay.logging.context import ScanContextFilter
from scanrelay.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from scanrelay.config.models import LoggingConfig

# Map of lowercase level names to logging module constants.
_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Target verbosity names. trace has no stdlib equivalent and maps to DEBUG.
_VERBOSITY_MAP: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

TARGET_LOGGER_PREFIX = "scanrelay.targets"

_TEXT_FORMAT = "%(asctime)s - %(scan_tag)s%(name)s - %(levelname)s - %(message)s"


def _formatter_for(fmt: str) -> logging.Formatter:
    if fmt.casefold() == "json":
        return JSONFormatter()
    # scan_tag is "[jellyfin:Movies] " inside a scan, empty otherwise
    return logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be opened."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from LoggingConfig.

    Writes to the configured file, to stderr, or both. stderr is always
    used when no file handler could be opened. Handlers carry no level of
    their own; filtering happens on loggers.

    Args:
        config: Logging configuration.
    """
    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _formatter_for(config.format)
    context_filter = ScanContextFilter()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(_LEVEL_MAP.get(config.level.casefold(), logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def get_target_logger(name: str, verbosity: str = "") -> logging.Logger:
    """Get the logger for one target, honouring its verbosity setting.

    Handlers carry no level of their own, so a target configured more
    verbose than the root level still reaches the output.

    Args:
        name: Target name, e.g. "jellyfin.0".
        verbosity: trace, debug, info, warn or error; empty inherits
            the root level.

    Returns:
        Logger named scanrelay.targets.<name>.
    """
    logger = logging.getLogger(f"{TARGET_LOGGER_PREFIX}.{name}")
    level = _VERBOSITY_MAP.get(verbosity.casefold())
    logger.setLevel(level if level is not None else logging.NOTSET)
    return logger
