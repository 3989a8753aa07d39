"""Jellyfin API client.

This module provides an HTTP client for the subset of the Jellyfin API a
scan target needs: library discovery, availability checks, view and item
lookup, item refresh and path-based library scans.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from scanrelay.config.models import JellyfinConfig
from scanrelay.jellyfin.models import Library

logger = logging.getLogger(__name__)

# Items fetched per page while searching a view for a path
ITEMS_PAGE_SIZE = 500

REFRESH_PARAMS = {
    "Recursive": "true",
    "MetadataRefreshMode": "Default",
    "ImageRefreshMode": "Default",
    "ReplaceAllMetadata": "false",
    "ReplaceAllImages": "false",
}


class JellyfinError(Exception):
    """Base class for Jellyfin client errors."""


class JellyfinConnectionError(JellyfinError):
    """Raised when a request to Jellyfin fails."""


class JellyfinAuthError(JellyfinConnectionError):
    """Raised when the Jellyfin token is rejected."""


class JellyfinNotFoundError(JellyfinError):
    """Raised when a named view does not exist for the user."""


def _library_path(location: str) -> str:
    """Ensure a library root ends with a separator.

    Keeps "/data/movies" from matching "/data/movies-4k/...".
    """
    return location if location.endswith("/") else location + "/"


class JellyfinClient:
    """HTTP client for the Jellyfin API.

    A single httpx.Client is created on first use and shared by every
    thread calling into this instance.
    """

    def __init__(self, config: JellyfinConfig) -> None:
        """Initialize the client.

        Args:
            config: Target configuration with URL, token and timeout.
        """
        self._base_url = config.url.rstrip("/")
        self._token = config.token
        self._timeout = config.timeout_seconds
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    def _headers(self) -> dict[str, str]:
        """Get request headers with the API token."""
        return {"X-Emby-Token": self._token, "Accept": "application/json"}

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self._base_url,
                    timeout=self._timeout,
                    headers=self._headers(),
                )
            return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def _request(
        self, method: str, url: str, action: str, **kwargs: Any
    ) -> httpx.Response:
        """Send a request and translate transport errors.

        Args:
            method: HTTP method.
            url: Path relative to the base URL.
            action: Short description used in error messages.
            **kwargs: Passed through to httpx.Client.request.

        Raises:
            JellyfinAuthError: If the token is rejected (401).
            JellyfinConnectionError: On connection, timeout or HTTP errors.
        """
        client = self._get_client()
        try:
            response = client.request(method, url, **kwargs)
            if response.status_code == 401:
                raise JellyfinAuthError(f"{action}: invalid token")
            response.raise_for_status()
            return response
        except httpx.ConnectError as e:
            raise JellyfinConnectionError(
                f"{action}: cannot connect to Jellyfin: {e}"
            ) from e
        except httpx.TimeoutException as e:
            raise JellyfinConnectionError(f"{action}: connection timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            raise JellyfinConnectionError(f"{action}: HTTP error: {e}") from e
        except httpx.HTTPError as e:
            raise JellyfinConnectionError(f"{action}: request failed: {e}") from e

    def _json(self, response: httpx.Response, action: str, expected: type) -> Any:
        """Decode the body and check it is a JSON value of the expected type.

        Raises:
            JellyfinConnectionError: If the body is not JSON or has another shape.
        """
        try:
            data = response.json()
        except ValueError as e:
            raise JellyfinConnectionError(f"{action}: invalid JSON response") from e
        if not isinstance(data, expected):
            raise JellyfinConnectionError(
                f"{action}: unexpected response: expected a JSON "
                f"{'object' if expected is dict else 'array'}"
            )
        return data

    def _records(self, value: Any, action: str) -> list[dict[str, Any]]:
        """Check that value is a list of JSON objects; null counts as empty."""
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            raise JellyfinConnectionError(
                f"{action}: unexpected response: expected a list of objects"
            )
        return value

    def available(self) -> None:
        """Check that Jellyfin is reachable and accepts the token.

        Raises:
            JellyfinConnectionError: If the server cannot be reached.
        """
        self._request("GET", "/System/Info", "availability check")

    def libraries(self) -> list[Library]:
        """Get all library locations, in the order Jellyfin returns them.

        Returns:
            One Library per (library, folder) pair.

        Raises:
            JellyfinConnectionError: If the request fails.
        """
        action = "retrieving libraries"
        response = self._request("GET", "/Library/VirtualFolders", action)
        folders = self._records(self._json(response, action, list), action)

        libraries: list[Library] = []
        for folder in folders:
            name = str(folder.get("Name") or "")
            locations = folder.get("Locations") or []
            if not isinstance(locations, list) or not all(
                isinstance(loc, str) for loc in locations
            ):
                raise JellyfinConnectionError(
                    f"{action}: unexpected response: bad Locations for '{name}'"
                )
            for location in locations:
                libraries.append(Library(name=name, path=_library_path(location)))
        logger.debug("Retrieved %d library locations", len(libraries))
        return libraries

    def get_view_id(self, user_id: str, library_name: str) -> str:
        """Get the id of a user's view (top-level library folder) by name.

        An exact name match is preferred over a case-insensitive one.

        Raises:
            JellyfinNotFoundError: If the user has no view with that name.
            JellyfinConnectionError: If the request fails.
        """
        action = "retrieving views"
        data = self._json(
            self._request("GET", f"/Users/{user_id}/Views", action), action, dict
        )
        views = self._records(data.get("Items"), action)

        for view in views:
            if view.get("Name") == library_name and view.get("Id"):
                return str(view["Id"])
        folded = library_name.casefold()
        for view in views:
            if str(view.get("Name") or "").casefold() == folded and view.get("Id"):
                return str(view["Id"])

        raise JellyfinNotFoundError(
            f"No view named '{library_name}' for user {user_id}"
        )

    def find_item_id_by_path(self, user_id: str, view_id: str, path: str) -> str:
        """Find the id of the item in a view whose Path equals path exactly.

        Pages through the view's items until a match is found.

        Returns:
            The item id, or an empty string when no item matches.

        Raises:
            JellyfinConnectionError: If a request fails.
        """
        action = "searching items"
        start = 0
        while True:
            params = {
                "ParentId": view_id,
                "Recursive": "true",
                "Fields": "Path",
                "StartIndex": start,
                "Limit": ITEMS_PAGE_SIZE,
            }
            data = self._json(
                self._request("GET", f"/Users/{user_id}/Items", action, params=params),
                action,
                dict,
            )
            items = self._records(data.get("Items"), action)
            for item in items:
                if item.get("Path") == path:
                    return str(item.get("Id") or "")

            start += len(items)
            total = data.get("TotalRecordCount", 0)
            if not isinstance(total, int):
                raise JellyfinConnectionError(
                    f"{action}: unexpected response: bad TotalRecordCount"
                )
            if not items or start >= total:
                return ""

    def refresh_item(self, item_id: str) -> None:
        """Request a recursive metadata refresh of one item.

        Raises:
            JellyfinConnectionError: If the request fails.
        """
        self._request(
            "POST",
            f"/Items/{item_id}/Refresh",
            "refreshing item",
            params=REFRESH_PARAMS,
        )

    def scan(self, path: str) -> None:
        """Notify Jellyfin that path changed, triggering a library scan.

        Raises:
            JellyfinConnectionError: If the request fails.
        """
        payload = {"Updates": [{"Path": path, "UpdateType": "Created"}]}
        self._request("POST", "/Library/Media/Updated", "sending scan", json=payload)
