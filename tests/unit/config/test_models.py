"""Tests for configuration models."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from scanrelay.config.models import JellyfinConfig, LoggingConfig
from scanrelay.rewrite import RewriteRule


class TestJellyfinConfig:
    """Tests for JellyfinConfig validation."""

    def test_defaults(self) -> None:
        """Should default to library scans with no rewrites."""
        config = JellyfinConfig(url="http://jellyfin:8096", token="abc")

        assert config.precise_refresh is False
        assert config.library == ""
        assert config.rewrite == ()
        assert config.timeout_seconds == 30

    def test_is_immutable(self) -> None:
        """Should reject mutation after construction."""
        config = JellyfinConfig(url="http://jellyfin:8096", token="abc")
        with pytest.raises(FrozenInstanceError):
            config.precise_refresh = True  # type: ignore[misc]

    def test_rejects_non_http_url(self) -> None:
        """Should reject URLs without an http(s) scheme."""
        with pytest.raises(ValueError, match="http"):
            JellyfinConfig(url="jellyfin:8096", token="abc")

    @pytest.mark.parametrize("token", ["", "   ", "has space"])
    def test_rejects_bad_token(self, token: str) -> None:
        """Should reject empty or whitespace-containing tokens."""
        with pytest.raises(ValueError, match="Token"):
            JellyfinConfig(url="http://jellyfin:8096", token=token)

    def test_precise_refresh_requires_user(self) -> None:
        """Should require user_id when precise refresh is enabled."""
        with pytest.raises(ValueError, match="user_id"):
            JellyfinConfig(
                url="http://jellyfin:8096", token="abc", precise_refresh=True
            )

    def test_rejects_unknown_verbosity(self) -> None:
        """Should reject verbosity names outside the known set."""
        with pytest.raises(ValueError, match="verbosity"):
            JellyfinConfig(url="http://jellyfin:8096", token="abc", verbosity="loud")

    @pytest.mark.parametrize("timeout", [0, 301])
    def test_rejects_timeout_out_of_range(self, timeout: int) -> None:
        """Should keep timeout within 1-300 seconds."""
        with pytest.raises(ValueError, match="Timeout"):
            JellyfinConfig(
                url="http://jellyfin:8096", token="abc", timeout_seconds=timeout
            )

    def test_accepts_rewrite_rules(self) -> None:
        """Should keep rewrite rules in order."""
        rules = (RewriteRule("^/a/", "/b/"), RewriteRule("^/c/", "/d/"))
        config = JellyfinConfig(url="http://j:8096", token="abc", rewrite=rules)
        assert config.rewrite == rules


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    def test_defaults(self) -> None:
        """Should default to info-level text logging on stderr."""
        config = LoggingConfig()
        assert config.level == "info"
        assert config.format == "text"
        assert config.file is None

    def test_rejects_invalid_level(self) -> None:
        """Should reject unknown levels."""
        with pytest.raises(ValueError, match="level"):
            LoggingConfig(level="verbose")

    def test_rejects_invalid_format(self) -> None:
        """Should reject unknown formats."""
        with pytest.raises(ValueError, match="format"):
            LoggingConfig(format="xml")

    def test_accepts_file(self) -> None:
        """Should accept a log file path."""
        assert LoggingConfig(file=Path("/tmp/x.log")).file == Path("/tmp/x.log")
