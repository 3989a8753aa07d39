"""Jellyfin scan target.

Turns a folder-changed Scan into the best available Jellyfin refresh:

1. Rewrite the folder into Jellyfin's view of the filesystem.
2. Resolve the library that owns it (first library whose root is a
   prefix of the path, in the order Jellyfin listed them).
3. With precise_refresh enabled, look up the library's view, find the
   item whose Path equals the folder and refresh that item recursively.
4. If precise refresh is disabled or any of its steps fails, fall back to
   a library scan of the folder.

Only a failed library scan is reported to the caller. The library list is
fetched once at construction and never refreshed, so libraries added in
Jellyfin afterwards are unknown until the target is rebuilt.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from scanrelay.config.models import JellyfinConfig
from scanrelay.jellyfin.client import JellyfinClient, JellyfinError
from scanrelay.jellyfin.models import Library, RefreshMethod, RefreshResult
from scanrelay.logging import get_target_logger, scan_context
from scanrelay.rewrite import new_rewriter
from scanrelay.scan import Scan


class NoMatchingLibraryError(Exception):
    """Raised when no library root is a prefix of a path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"{path}: failed determining library")


def resolve_library(folder: str, libraries: Sequence[Library]) -> Library:
    """Find the library that owns folder.

    First match wins: with nested library roots, the library listed
    earlier is chosen even when a later one is more specific.

    Raises:
        NoMatchingLibraryError: If no library root prefixes folder.
    """
    for library in libraries:
        if folder.startswith(library.path):
            return library
    raise NoMatchingLibraryError(folder)


class JellyfinTarget:
    """Scan target for one Jellyfin server.

    All state is fixed at construction, so one instance can serve scans
    from many threads at once.
    """

    def __init__(
        self,
        config: JellyfinConfig,
        *,
        name: str = "jellyfin",
        client: JellyfinClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Build the target and capture the library list.

        Args:
            config: Target configuration.
            name: Target name used in log context.
            client: API client; one is created from config when omitted.
            logger: Logger for scan outcomes; defaults to the target logger
                at the configured verbosity.

        Raises:
            RewriteError: If a rewrite rule is invalid.
            JellyfinError: If the library list cannot be retrieved.
        """
        self.name = name
        self._config = config
        self._log = logger or get_target_logger(name, config.verbosity)
        self._rewrite = new_rewriter(config.rewrite)
        self._api = client if client is not None else JellyfinClient(config)
        try:
            self._libraries: tuple[Library, ...] = tuple(self._api.libraries())
        except Exception:
            # an injected client belongs to the caller
            if client is None:
                self._api.close()
            raise

        self._log.debug(
            "Retrieved libraries from %s: %s",
            config.url,
            ", ".join(f"{lib.name}={lib.path}" for lib in self._libraries),
        )

    @property
    def libraries(self) -> tuple[Library, ...]:
        """Library snapshot taken at construction."""
        return self._libraries

    def close(self) -> None:
        self._api.close()

    def available(self) -> None:
        """Raise JellyfinError if Jellyfin cannot be reached."""
        self._api.available()

    def scan(self, scan: Scan) -> RefreshMethod:
        """Refresh Jellyfin for one changed folder.

        Args:
            scan: The scan event.

        Returns:
            The strategy that handled the scan. SKIPPED means no library
            owns the folder and nothing was sent.

        Raises:
            JellyfinError: If the library scan, the last strategy, fails.
        """
        folder = self._rewrite(scan.folder)

        try:
            library = resolve_library(folder, self._libraries)
        except NoMatchingLibraryError as e:
            self._log.warning("No target libraries found: %s", e)
            return RefreshMethod.SKIPPED

        with scan_context(self.name, folder, library.name):
            if self._config.precise_refresh:
                self._log.debug("Trying precise refresh of %s", folder)
                result = self._refresh_precisely(library, folder)
                if result.ok:
                    return RefreshMethod.ITEM

            self._log.debug("Sending library scan request for %s", folder)
            result = self._scan_library(folder)
            if result.error is not None:
                raise result.error
            return RefreshMethod.LIBRARY

    def _view_library_name(self, library: Library) -> str:
        """Library name used for the view lookup: the override, if set."""
        override = self._config.library.strip()
        return override or library.name

    def _refresh_precisely(self, library: Library, folder: str) -> RefreshResult:
        """Look up the view, then the item, then refresh it; stop at the first miss."""
        view = self._resolve_view(self._view_library_name(library))
        if not view.ok:
            return view

        item = self._locate_item(view.value, folder)
        if not item.ok:
            return item

        return self._refresh_item(item.value)

    def _resolve_view(self, library_name: str) -> RefreshResult:
        try:
            view_id = self._api.get_view_id(self._config.user_id, library_name)
        except JellyfinError as e:
            self._log.warning(
                "Cannot resolve view id of library %s; "
                "falling back to library scan: %s",
                library_name,
                e,
            )
            return RefreshResult.fallback("view lookup failed", e)
        return RefreshResult.handled(view_id)

    def _locate_item(self, view_id: str, folder: str) -> RefreshResult:
        try:
            item_id = self._api.find_item_id_by_path(
                self._config.user_id, view_id, folder
            )
        except JellyfinError as e:
            self._log.warning(
                "Cannot match item by exact path %s; "
                "falling back to library scan: %s",
                folder,
                e,
            )
            return RefreshResult.fallback("item lookup failed", e)

        if not item_id or not item_id.strip():
            self._log.warning(
                "No item with path %s; falling back to library scan", folder
            )
            return RefreshResult.fallback("no item matches path")
        return RefreshResult.handled(item_id.strip())

    def _refresh_item(self, item_id: str) -> RefreshResult:
        try:
            self._api.refresh_item(item_id)
        except JellyfinError as e:
            self._log.warning(
                "Refresh of item %s failed; falling back to library scan: %s",
                item_id,
                e,
            )
            return RefreshResult.fallback("item refresh failed", e)

        self._log.info("Refreshed item %s recursively (precise refresh)", item_id)
        return RefreshResult.handled(item_id)

    def _scan_library(self, folder: str) -> RefreshResult:
        try:
            self._api.scan(folder)
        except JellyfinError as e:
            return RefreshResult.failed(e)

        self._log.info("Scan moved to target")
        return RefreshResult.handled()
