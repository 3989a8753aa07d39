"""Construction of every configured scan target."""

from __future__ import annotations

import logging

from scanrelay.config.models import AppConfig
from scanrelay.jellyfin import JellyfinTarget

logger = logging.getLogger(__name__)


def build_targets(config: AppConfig) -> list[JellyfinTarget]:
    """Build one target per configured Jellyfin server.

    Targets are named "jellyfin" when only one is configured and
    "jellyfin.<index>" otherwise.

    Raises:
        RewriteError: If a target's rewrite rules are invalid.
        JellyfinError: If a target's library list cannot be fetched.
    """
    targets: list[JellyfinTarget] = []
    many = len(config.jellyfin) > 1
    try:
        for index, target_config in enumerate(config.jellyfin):
            name = f"jellyfin.{index}" if many else "jellyfin"
            targets.append(JellyfinTarget(target_config, name=name))
            logger.info("Initialised target %s (%s)", name, target_config.url)
    except Exception:
        for target in targets:
            target.close()
        raise
    return targets
