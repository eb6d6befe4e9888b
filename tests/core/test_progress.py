"""Tests for core/progress.py module."""

from __future__ import annotations

import logging

import pytest

from splice.core.logging import ConsoleSuppressingFilter
from splice.core.progress import (
    _STYLES,
    get_console,
    is_console_suppressed,
    pluralize,
    spinner,
    status,
    suppress_console_logs,
)


class TestStatus:
    """Tests for status()."""

    @pytest.mark.parametrize("style", sorted(_STYLES))
    def test_prints_message_for_every_style(self, style: str) -> None:
        console = get_console()
        with console.capture() as capture:
            status("Compiled a.md", style=style)

        assert "Compiled a.md" in capture.get()

    def test_success_marker(self) -> None:
        with get_console().capture() as capture:
            status("done", style="success")

        assert "✓" in capture.get()

    def test_error_marker(self) -> None:
        with get_console().capture() as capture:
            status("Missing symbol: x", style="error")

        assert "✗" in capture.get()

    def test_indent(self) -> None:
        with get_console().capture() as capture:
            status("nested", style="none", indent=4)

        assert capture.get().startswith("    nested")


class TestPluralize:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 files"), (1, "1 file"), (2, "2 files")],
    )
    def test_regular(self, count: int, expected: str) -> None:
        assert pluralize(count, "file") == expected

    def test_irregular(self) -> None:
        assert pluralize(3, "series", "series") == "3 series"


class TestConsoleSuppression:
    def test_suppressed_only_inside_block(self) -> None:
        assert not is_console_suppressed()
        with suppress_console_logs():
            assert is_console_suppressed()
        assert not is_console_suppressed()

    def test_filter_blocks_records_while_suppressed(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        log_filter = ConsoleSuppressingFilter()

        assert log_filter.filter(record)
        with suppress_console_logs():
            assert not log_filter.filter(record)


class TestSpinner:
    def test_non_tty_prints_message_and_runs_block(self) -> None:
        ran = []
        with get_console().capture() as capture, spinner("Updating"):
            ran.append(True)

        assert ran == [True]
        assert "Updating" in capture.get()
