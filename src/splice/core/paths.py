"""Path sanitization and line-file helpers.

Sanitizers come in two flavors: ``sanitize_file``/``sanitize_dir`` raise
``PathError`` carrying the offending path, ``find_file``/``find_dir`` return
None instead.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterable
from pathlib import Path

from splice.core.errors import ErrorCode, PathError


def _full_path(path: str | Path, base: str | Path | None) -> Path:
    path = Path(path).expanduser()
    if base is not None and not path.is_absolute():
        path = Path(base).expanduser() / path
    return Path(os.path.abspath(path))


def _check_base(base: str | Path | None) -> None:
    if base is None:
        return
    base_path = Path(base).expanduser()
    if not base_path.exists():
        raise PathError.of(ErrorCode.PATH_MISSING_BASE, str(base_path))
    if not base_path.is_dir():
        raise PathError.of(ErrorCode.PATH_WRONG_BASE, str(base_path))


def sanitize_file(path: str | Path, *, base: str | Path | None = None) -> Path:
    """Return the absolute path of an existing regular file.

    Raises:
        PathError: base missing or not a directory, path missing or not a file
    """
    _check_base(base)
    full = _full_path(path, base)
    if not full.exists():
        raise PathError.of(ErrorCode.PATH_MISSING, str(full))
    if not full.is_file():
        raise PathError.of(ErrorCode.PATH_NOT_FILE, str(full))
    return full


def sanitize_dir(path: str | Path, *, base: str | Path | None = None) -> Path:
    """Return the absolute path of an existing directory.

    Raises:
        PathError: base missing or not a directory, path missing or not a directory
    """
    _check_base(base)
    full = _full_path(path, base)
    if not full.exists():
        raise PathError.of(ErrorCode.PATH_MISSING, str(full))
    if not full.is_dir():
        raise PathError.of(ErrorCode.PATH_NOT_DIR, str(full))
    return full


def find_file(path: str | Path, *, base: str | Path | None = None) -> Path | None:
    try:
        return sanitize_file(path, base=base)
    except PathError:
        return None


def find_dir(path: str | Path, *, base: str | Path | None = None) -> Path | None:
    try:
        return sanitize_dir(path, base=base)
    except PathError:
        return None


def deflate_path(path: str | Path, root: str | Path) -> str:
    """Normalize path to a POSIX string relative to root.

    Relative paths are taken relative to the current working directory, so
    "./a", "a" and "sub/../a" all deflate to the same key.
    """
    full = Path(path).expanduser()
    if not full.is_absolute():
        full = Path.cwd() / full
    rel = os.path.relpath(full.resolve(), Path(root).expanduser().resolve())
    return Path(rel).as_posix()


def expand_path(path: str | Path, root: str | Path) -> Path:
    """Inverse of deflate_path: absolute path of a root-relative path."""
    return Path(os.path.normpath(Path(root) / path))


def digest(lines: Iterable[str]) -> str:
    """SHA-256 of lines joined with newline terminators."""
    hasher = hashlib.sha256()
    for line in lines:
        hasher.update(line.encode("utf-8"))
        hasher.update(b"\n")
    return hasher.hexdigest()


def split_lines(text: str) -> tuple[list[str], bool]:
    """Split text on LF only; also tell whether the last line was terminated.

    Carriage returns, form feeds and other separators recognized by
    str.splitlines stay inside line content.
    """
    if not text:
        return [], True
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
        return lines, True
    return lines, False


def read_text(path: str | Path) -> str:
    """Read a UTF-8 file without newline translation."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def read_lines(path: str | Path) -> list[str]:
    """Read a text file as LF-separated lines without the LF."""
    return split_lines(read_text(path))[0]


def write_lines(path: str | Path, lines: Iterable[str], *, terminated: bool = True) -> None:
    """Join lines with LF, adding a final LF when terminated is set."""
    lines = list(lines)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("\n".join(lines))
        if terminated and lines:
            f.write("\n")
