"""Scan context for structured logging.

Each scan runs inside scan_context(), which records the target, the
rewritten path and the resolved library in contextvars. Concurrent scans
on different threads each see their own values.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Generator


class ScanContext(NamedTuple):
    target: str | None
    path: str | None
    library: str | None


_target: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_target", default=None
)
_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_path", default=None
)
_library: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_library", default=None
)


@contextmanager
def scan_context(
    target: str,
    path: str | None = None,
    library: str | None = None,
) -> Generator[None, None, None]:
    """Set scan context on entry and restore the previous one on exit.

    Example:
        with scan_context("jellyfin", "/data/movies/Inception", "Movies"):
            logger.info("Scan moved to target")  # carries the context
    """
    tokens = (
        _target.set(target),
        _path.set(path),
        _library.set(library),
    )
    try:
        yield
    finally:
        _library.reset(tokens[2])
        _path.reset(tokens[1])
        _target.reset(tokens[0])


def get_scan_context() -> ScanContext:
    """Get the current scan context; fields are None outside a scan."""
    return ScanContext(_target.get(), _path.get(), _library.get())


class ScanContextFilter(logging.Filter):
    """Logging filter that injects scan context into log records.

    Adds scan_target, scan_path and scan_library for JSON output and a
    compact scan_tag such as "[jellyfin:Movies] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        target, path, library = get_scan_context()

        record.scan_target = target
        record.scan_path = path
        record.scan_library = library

        if target:
            if library:
                record.scan_tag = f"[{target}:{library}] "
            else:
                record.scan_tag = f"[{target}] "
        else:
            record.scan_tag = ""

        return True
