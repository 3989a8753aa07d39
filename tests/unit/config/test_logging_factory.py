"""Tests for logging_factory module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from scanrelay.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from scanrelay.config.models import LoggingConfig


class TestBuildLoggingConfig:
    """Tests for build_logging_config function."""

    @pytest.fixture
    def base_config(self) -> LoggingConfig:
        """Create a base LoggingConfig for testing."""
        return LoggingConfig(
            level="info",
            file=Path("/var/log/scanrelay.log"),
            format="text",
            include_stderr=True,
            max_bytes=10_000_000,
            backup_count=5,
        )

    def test_returns_base_values_when_no_overrides(
        self, base_config: LoggingConfig
    ) -> None:
        """Should return base values when no overrides provided."""
        result = build_logging_config(base_config)
        assert result == base_config

    def test_overrides_level(self, base_config: LoggingConfig) -> None:
        """Should override log level when provided."""
        result = build_logging_config(base_config, level="debug")
        assert result.level == "debug"
        assert result.file == base_config.file

    def test_overrides_format_and_file(self, base_config: LoggingConfig) -> None:
        """Should override format and file when provided."""
        result = build_logging_config(
            base_config, format="json", file=Path("/tmp/x.log")
        )
        assert result.format == "json"
        assert result.file == Path("/tmp/x.log")

    def test_invalid_override_raises(self, base_config: LoggingConfig) -> None:
        """Should raise ValueError for invalid overrides."""
        with pytest.raises(ValueError):
            build_logging_config(base_config, level="loud")


class TestConfigureLoggingFromCli:
    """Tests for configure_logging_from_cli."""

    def test_applies_merged_config(self) -> None:
        """Should configure logging with overrides applied."""
        with patch("scanrelay.logging.configure_logging") as mock_configure:
            configure_logging_from_cli(LoggingConfig(), level="debug")

        applied = mock_configure.call_args[0][0]
        assert applied.level == "debug"
        assert applied.format == "text"
