"""Tracked client files of one project.

Files are keyed by their deflated (project-relative, normalized) path so the
same file reached through different textual paths is tracked once. Saving is
digest gated: a file is rewritten only when its lines changed since it was
loaded or last saved.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from splice.client.source import Source
from splice.client.state import SourceRecord, State, from_record, to_record
from splice.core.logging import get_logger
from splice.core.paths import (
    deflate_path,
    digest,
    expand_path,
    find_file,
    sanitize_file,
    write_lines,
)

log = get_logger("repository")


@dataclass
class TrackedFile:
    """A client file with the digest of its on-disk content."""

    path: str
    source: Source
    digest: str
    registered: bool = True


class Repository:
    """All client files known to a project."""

    def __init__(self, root: Path, *, on_save: Callable[[str], None] | None = None) -> None:
        """Initialize repository.

        Args:
            root: Project root; keys are relative to it.
            on_save: Callback invoked with the key of every file written.
        """
        self.root = root
        self._on_save = on_save
        self._files: dict[str, TrackedFile] = {}
        self._memo: dict[str, str] = {}

    def __getitem__(self, path: str | Path) -> Source:
        return self._files[self._key(path)].source

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self._key(path) in self._files

    def __len__(self) -> int:
        return len(self._files)

    def sources(self, *, registered_only: bool = True) -> Iterator[Source]:
        for file in list(self._files.values()):
            if file.registered or not registered_only:
                yield file.source

    def register(self, path: str | Path) -> Source:
        """Track a file, loading it from disk unless it is already known.

        Raises:
            PathError: The file does not exist or is not a regular file.
        """
        key = self._key(path)
        if key in self._files:
            file = self._files[key]
            file.registered = True
            return file.source

        full = sanitize_file(expand_path(key, self.root))
        return self._track(key, Source.from_file(full, key))

    def unregister(self, path: str | Path) -> Source | None:
        """Stop tracking a file; its in-memory source stays addressable."""
        key = self._key(path)
        if key not in self._files:
            return None
        file = self._files[key]
        file.registered = False
        return file.source

    def registered(self, path: str | Path) -> bool:
        key = self._key(path)
        return key in self._files and self._files[key].registered

    def save(self, *, all: bool = True) -> int:  # noqa: A002
        """Write changed files; returns how many were written.

        Args:
            all: Also consider unregistered files.
        """
        written = 0
        for file in self._files.values():
            if not file.registered and not all:
                continue
            new_digest = digest(file.source.lines)
            if new_digest == file.digest:
                continue

            write_lines(
                expand_path(file.path, self.root),
                file.source.lines,
                terminated=file.source.terminated,
            )
            file.digest = new_digest
            written += 1
            log.info("file_saved", path=file.path, lines=len(file.source.lines))
            if self._on_save is not None:
                self._on_save(file.path)
        return written

    def dump(self) -> State:
        """Snapshot of registered files that have compiled series."""
        records = [
            SourceRecord(source=key, series=[to_record(s) for s in file.source.series])
            for key, file in self._files.items()
            if file.registered and file.source.series
        ]
        return State(sources=records)

    def load(self, state: State) -> int:
        """Track every file recorded in state; returns how many were loaded.

        Recorded files that no longer exist are dropped with a warning.
        """
        loaded = 0
        for record in state.sources:
            key = self._key(expand_path(record.source, self.root))
            full = find_file(expand_path(key, self.root))
            if full is None:
                log.warning("tracked_file_missing", path=key)
                continue
            series = [from_record(r) for r in record.series]
            self._track(key, Source.from_file(full, key, series))
            loaded += 1
        log.debug("state_loaded", files=loaded)
        return loaded

    def _key(self, path: str | Path) -> str:
        raw = str(path)
        if raw not in self._memo:
            self._memo[raw] = deflate_path(path, self.root)
        return self._memo[raw]

    def _track(self, key: str, source: Source) -> Source:
        self._files[key] = TrackedFile(
            path=key,
            source=source,
            digest=digest(source.lines),
            registered=True,
        )
        return source
