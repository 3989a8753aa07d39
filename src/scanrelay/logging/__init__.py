"""Structured logging for scanrelay.

Provides text/JSON output with file rotation, per-target verbosity, and
per-scan context injection that is safe across concurrent scans.
"""

from scanrelay.logging.config import configure_logging, get_target_logger
from scanrelay.logging.context import (
    ScanContextFilter,
    get_scan_context,
    scan_context,
)
from scanrelay.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ScanContextFilter",
    "configure_logging",
    "get_scan_context",
    "get_target_logger",
    "scan_context",
]
