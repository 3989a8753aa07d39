"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from scanrelay.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        """Should return the value when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_str("MY_VAR", "default") == "default"

    def test_blank_value_treated_as_unset(self) -> None:
        """Should fall back to default for blank values."""
        reader = EnvReader(env={"MY_VAR": "  "})
        assert reader.get_str("MY_VAR", "default") == "default"


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    @pytest.mark.parametrize("value", ["true", "1", "YES", "On"])
    def test_true_values(self, value: str) -> None:
        """Should recognise true values case-insensitively."""
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR") is True

    def test_other_values_false(self) -> None:
        """Should treat any other value as false."""
        assert EnvReader(env={"MY_VAR": "nope"}).get_bool("MY_VAR", True) is False

    def test_default_when_not_set(self) -> None:
        """Should return default when not set."""
        assert EnvReader(env={}).get_bool("MY_VAR", True) is True


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_expands_tilde(self) -> None:
        """Should expand ~ in paths."""
        path = EnvReader(env={"MY_VAR": "~/x.yml"}).get_path("MY_VAR")
        assert path == Path.home() / "x.yml"

    def test_missing_path_with_must_exist(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should warn and return default for missing paths when required."""
        reader = EnvReader(env={"MY_VAR": str(tmp_path / "missing")})

        with caplog.at_level(logging.WARNING):
            assert reader.get_path("MY_VAR", must_exist=True) is None

        assert "non-existent path" in caplog.text

    def test_existing_path_with_must_exist(self, tmp_path: Path) -> None:
        """Should return existing paths when required to exist."""
        reader = EnvReader(env={"MY_VAR": str(tmp_path)})
        assert reader.get_path("MY_VAR", must_exist=True) == tmp_path
