"""Jellyfin library and refresh-result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Library:
    """A Jellyfin library location.

    Libraries with several folders appear once per folder, all sharing
    the same name.
    """

    name: str
    path: str  # Root folder as Jellyfin sees it


class RefreshOutcome(Enum):
    """Tag of a refresh step's result."""

    HANDLED = "handled"
    FALLBACK = "fallback"
    FAILED = "failed"


class RefreshMethod(Enum):
    """Which strategy finally handled a scan."""

    ITEM = "item"  # precise, item-level refresh
    LIBRARY = "library"  # full library scan
    SKIPPED = "skipped"  # no library matched the path


@dataclass(frozen=True)
class RefreshResult:
    """Tagged result of one refresh step.

    FALLBACK carries the reason the next strategy is needed; FAILED
    carries the error that ended the chain.
    """

    outcome: RefreshOutcome
    reason: str | None = None
    error: Exception | None = None
    value: str = ""  # view or item id produced by a lookup step

    @classmethod
    def handled(cls, value: str = "") -> RefreshResult:
        return cls(RefreshOutcome.HANDLED, value=value)

    @classmethod
    def fallback(cls, reason: str, error: Exception | None = None) -> RefreshResult:
        return cls(RefreshOutcome.FALLBACK, reason=reason, error=error)

    @classmethod
    def failed(cls, error: Exception) -> RefreshResult:
        return cls(RefreshOutcome.FAILED, reason=str(error), error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is RefreshOutcome.HANDLED
