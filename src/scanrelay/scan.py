"""Scan events and the target protocol.

A Scan is the only input a target receives per detected change. Targets
are constructed once and serve an unbounded number of scans, possibly
from several threads at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Scan:
    """A folder-changed notification from the upstream watcher."""

    folder: str
    priority: int = 0
    time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@runtime_checkable
class Target(Protocol):
    """Protocol implemented by every scan target.

    Both methods may be called concurrently; implementations must not
    mutate shared state after construction.
    """

    def available(self) -> None:
        """Raise if the remote system cannot currently be reached."""
        ...

    def scan(self, scan: Scan) -> object:
        """Handle one scan event.

        Raises only when no refresh strategy remains.
        """
        ...
