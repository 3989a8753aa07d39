"""Jellyfin scan target and API client."""

from scanrelay.jellyfin.client import (
    JellyfinAuthError,
    JellyfinClient,
    JellyfinConnectionError,
    JellyfinError,
    JellyfinNotFoundError,
)
from scanrelay.jellyfin.models import (
    Library,
    RefreshMethod,
    RefreshOutcome,
    RefreshResult,
)
from scanrelay.jellyfin.target import (
    JellyfinTarget,
    NoMatchingLibraryError,
    resolve_library,
)

__all__ = [
    "JellyfinAuthError",
    "JellyfinClient",
    "JellyfinConnectionError",
    "JellyfinError",
    "JellyfinNotFoundError",
    "JellyfinTarget",
    "Library",
    "NoMatchingLibraryError",
    "RefreshMethod",
    "RefreshOutcome",
    "RefreshResult",
    "resolve_library",
]
