"""Shared test fixtures for scanrelay."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from scanrelay.config.models import JellyfinConfig
from scanrelay.jellyfin.client import JellyfinClient
from scanrelay.jellyfin.models import Library


@pytest.fixture
def libraries() -> list[Library]:
    """Library list as the client would return it."""
    return [
        Library(name="Movies", path="/data/movies"),
        Library(name="TV", path="/data/tv"),
    ]


@pytest.fixture
def jellyfin_config() -> JellyfinConfig:
    """Target config with precise refresh disabled."""
    return JellyfinConfig(
        url="http://jellyfin:8096",
        token="test-token-12345",  # pragma: allowlist secret
        user_id="user-1",
    )


@pytest.fixture
def precise_config() -> JellyfinConfig:
    """Target config with precise refresh enabled."""
    return JellyfinConfig(
        url="http://jellyfin:8096",
        token="test-token-12345",  # pragma: allowlist secret
        user_id="user-1",
        precise_refresh=True,
    )


@pytest.fixture
def mock_client(libraries: list[Library]) -> MagicMock:
    """JellyfinClient double whose calls all succeed."""
    client = MagicMock(spec=JellyfinClient)
    client.libraries.return_value = list(libraries)
    client.get_view_id.return_value = "view-1"
    client.find_item_id_by_path.return_value = "42"
    return client


@pytest.fixture
def mock_logger() -> MagicMock:
    """Injected logger double for asserting on emitted warnings."""
    return MagicMock(spec=logging.Logger)
