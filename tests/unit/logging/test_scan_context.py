"""Unit tests for logging scan context."""

import logging
import threading

from scanrelay.logging.context import ScanContextFilter, get_scan_context, scan_context


def make_record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="message",
        args=(),
        exc_info=None,
    )


class TestScanContext:
    """Tests for scan_context and get_scan_context."""

    def test_empty_outside_scan(self) -> None:
        """Test that all fields are None outside a scan."""
        assert get_scan_context() == (None, None, None)

    def test_sets_and_restores(self) -> None:
        """Test that the context is visible inside and cleared after."""
        with scan_context("jellyfin", "/data/tv/Show", "TV"):
            ctx = get_scan_context()
            assert ctx.target == "jellyfin"
            assert ctx.path == "/data/tv/Show"
            assert ctx.library == "TV"

        assert get_scan_context() == (None, None, None)

    def test_nested_restores_outer(self) -> None:
        """Test that leaving a nested context restores the outer one."""
        with scan_context("jellyfin.0", "/a", "A"):
            with scan_context("jellyfin.1", "/b"):
                assert get_scan_context() == ("jellyfin.1", "/b", None)
            assert get_scan_context() == ("jellyfin.0", "/a", "A")

    def test_restored_after_exception(self) -> None:
        """Test that an exception inside the block still restores context."""
        try:
            with scan_context("jellyfin", "/a"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert get_scan_context() == (None, None, None)

    def test_thread_isolation(self) -> None:
        """Test that each thread sees only its own context."""
        results: dict[str, tuple] = {}
        barrier = threading.Barrier(2)

        def worker(name: str) -> None:
            with scan_context(name, f"/{name}"):
                barrier.wait()
                results[name] = tuple(get_scan_context())

        threads = [threading.Thread(target=worker, args=(n,)) for n in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {"a": ("a", "/a", None), "b": ("b", "/b", None)}


class TestScanContextFilter:
    """Tests for ScanContextFilter."""

    def test_tag_with_library(self) -> None:
        """Test that target and library appear in the tag."""
        record = make_record()
        with scan_context("jellyfin", "/data/movies/x", "Movies"):
            assert ScanContextFilter().filter(record) is True

        assert record.scan_tag == "[jellyfin:Movies] "
        assert record.scan_path == "/data/movies/x"

    def test_tag_without_library(self) -> None:
        """Test that only the target is shown when no library is set."""
        record = make_record()
        with scan_context("jellyfin"):
            ScanContextFilter().filter(record)

        assert record.scan_tag == "[jellyfin] "

    def test_empty_tag_outside_scan(self) -> None:
        """Test that records outside a scan get an empty tag."""
        record = make_record()
        ScanContextFilter().filter(record)

        assert record.scan_tag == ""
        assert record.scan_target is None
