"""Unit tests for refresh result tagging."""

from scanrelay.jellyfin.models import RefreshOutcome, RefreshResult


class TestRefreshResult:
    """Tests for RefreshResult constructors."""

    def test_handled(self):
        """Test that handled results are ok and carry a value."""
        result = RefreshResult.handled("42")

        assert result.ok
        assert result.outcome is RefreshOutcome.HANDLED
        assert result.value == "42"
        assert result.error is None

    def test_value_is_always_a_string(self):
        """Test that results without an id carry an empty string value."""
        assert RefreshResult.handled().value == ""
        assert RefreshResult.fallback("no item matches path").value == ""

    def test_fallback_keeps_reason_and_error(self):
        """Test that fallback results record why the next strategy is needed."""
        error = RuntimeError("boom")
        result = RefreshResult.fallback("view lookup failed", error)

        assert not result.ok
        assert result.outcome is RefreshOutcome.FALLBACK
        assert result.reason == "view lookup failed"
        assert result.error is error

    def test_failed(self):
        """Test that failed results carry the error and its message."""
        error = RuntimeError("scan failed")
        result = RefreshResult.failed(error)

        assert not result.ok
        assert result.outcome is RefreshOutcome.FAILED
        assert result.reason == "scan failed"
        assert result.error is error
