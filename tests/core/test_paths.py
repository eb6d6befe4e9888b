"""Tests for core/paths.py module.

Covers:
- sanitize_file() / sanitize_dir() error codes
- find_file() / find_dir() None results
- deflate_path() / expand_path()
- digest(), split_lines(), read_lines(), write_lines()
"""

from __future__ import annotations

from pathlib import Path

import pytest

from splice.core.errors import ErrorCode, PathError
from splice.core.paths import (
    deflate_path,
    digest,
    expand_path,
    find_dir,
    find_file,
    read_lines,
    read_text,
    sanitize_dir,
    sanitize_file,
    split_lines,
    write_lines,
)


class TestSanitizeFile:
    """Tests for sanitize_file."""

    def test_returns_absolute_path_for_existing_file(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("x\n")

        result = sanitize_file("a.txt", base=tmp_path)

        assert result == tmp_path / "a.txt"
        assert result.is_absolute()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PathError) as exc_info:
            sanitize_file("nope.txt", base=tmp_path)

        assert exc_info.value.code == ErrorCode.PATH_MISSING
        assert exc_info.value.path == str(tmp_path / "nope.txt")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()

        with pytest.raises(PathError) as exc_info:
            sanitize_file("sub", base=tmp_path)

        assert exc_info.value.code == ErrorCode.PATH_NOT_FILE

    def test_missing_base(self, tmp_path: Path) -> None:
        with pytest.raises(PathError) as exc_info:
            sanitize_file("a.txt", base=tmp_path / "gone")

        assert exc_info.value.code == ErrorCode.PATH_MISSING_BASE

    def test_base_is_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "base").write_text("")

        with pytest.raises(PathError) as exc_info:
            sanitize_file("a.txt", base=tmp_path / "base")

        assert exc_info.value.code == ErrorCode.PATH_WRONG_BASE

    def test_absolute_path_ignores_base(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("")
        (tmp_path / "other").mkdir()

        assert sanitize_file(target, base=tmp_path / "other") == target


class TestSanitizeDir:
    """Tests for sanitize_dir."""

    def test_returns_existing_directory(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()

        assert sanitize_dir("sub", base=tmp_path) == tmp_path / "sub"

    def test_file_is_not_a_directory(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("")

        with pytest.raises(PathError) as exc_info:
            sanitize_dir("a.txt", base=tmp_path)

        assert exc_info.value.code == ErrorCode.PATH_NOT_DIR


class TestFind:
    """Tests for the None-returning variants."""

    def test_find_file_returns_none_when_missing(self, tmp_path: Path) -> None:
        assert find_file("nope", base=tmp_path) is None

    def test_find_file_returns_none_for_bad_base(self, tmp_path: Path) -> None:
        assert find_file("nope", base=tmp_path / "gone") is None

    def test_find_dir_returns_none_for_file(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("")

        assert find_dir("a.txt", base=tmp_path) is None

    def test_find_dir_returns_path(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()

        assert find_dir("sub", base=tmp_path) == tmp_path / "sub"


class TestDeflatePath:
    """Tests for deflate_path / expand_path."""

    @pytest.mark.parametrize("spelling", ["a.txt", "./a.txt", "sub/../a.txt"])
    def test_equivalent_spellings_share_one_key(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, spelling: str
    ) -> None:
        (tmp_path / "sub").mkdir()
        monkeypatch.chdir(tmp_path)

        assert deflate_path(spelling, tmp_path) == "a.txt"

    def test_absolute_path_is_made_relative(self, tmp_path: Path) -> None:
        assert deflate_path(tmp_path / "docs" / "x.md", tmp_path) == "docs/x.md"

    def test_relative_to_cwd_not_root(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "docs").mkdir()
        monkeypatch.chdir(tmp_path / "docs")

        assert deflate_path("x.md", tmp_path) == "docs/x.md"

    def test_expand_is_inverse(self, tmp_path: Path) -> None:
        key = deflate_path(tmp_path / "docs" / "x.md", tmp_path)

        assert expand_path(key, tmp_path) == tmp_path / "docs" / "x.md"


class TestDigest:
    """Tests for digest."""

    def test_is_sha256_hex(self) -> None:
        assert len(digest(["a"])) == 64

    def test_terminators_are_part_of_content(self) -> None:
        assert digest(["ab"]) != digest(["a", "b"])
        assert digest([]) != digest([""])

    def test_same_lines_same_digest(self) -> None:
        assert digest(["x", "y"]) == digest(iter(["x", "y"]))


class TestSplitLines:
    """Tests for split_lines."""

    def test_splits_on_lf_only(self) -> None:
        assert split_lines("a\r\nb\x0cc\x1dd e\n") == (["a\r", "b\x0cc\x1dd e"], True)

    def test_reports_missing_final_lf(self) -> None:
        assert split_lines("a\nb") == (["a", "b"], False)

    def test_blank_last_line_kept(self) -> None:
        assert split_lines("a\n\n") == (["a", ""], True)

    def test_empty_text(self) -> None:
        assert split_lines("") == ([], True)


class TestLineFiles:
    """Tests for read_lines / write_lines."""

    def test_write_terminates_every_line(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"

        write_lines(target, ["a", "", "b"])

        assert target.read_bytes() == b"a\n\nb\n"

    def test_write_without_final_lf(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"

        write_lines(target, ["a", "b"], terminated=False)

        assert target.read_bytes() == b"a\nb"

    def test_single_blank_line(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"

        write_lines(target, [""])

        assert target.read_bytes() == b"\n"

    def test_read_keeps_carriage_returns(self, tmp_path: Path) -> None:
        target = tmp_path / "in.txt"
        target.write_bytes(b"a\r\nb\n")

        assert read_lines(target) == ["a\r", "b"]
        assert read_text(target) == "a\r\nb\n"

    def test_crlf_and_control_characters_survive_round_trip(self, tmp_path: Path) -> None:
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        raw = "one\r\ntwo\x0cthree\x0bfour\r\n\x85five\n".encode()
        source.write_bytes(raw)

        write_lines(target, read_lines(source))

        assert target.read_bytes() == raw

    def test_empty_file_has_no_lines(self, tmp_path: Path) -> None:
        target = tmp_path / "empty.txt"
        target.write_text("")

        assert read_lines(target) == []
