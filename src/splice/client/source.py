"""Client source engine: compile, decompile and update of one file.

Every compiled directive occupies a contiguous block of lines recorded as a
Series. Lines outside all blocks are never touched. Lines inside a block are
owned by the server: decompile and update replace the whole block, dropping
any manual edit made inside it.

Series positions are line indices and go stale when lines above a block are
added or removed. Before every operation blocks are re-located by the digest
of their content as inserted, nearest match first.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from splice.client.directive import Directive
from splice.core.logging import get_logger
from splice.core.paths import digest, read_text, split_lines
from splice.server.catalog import Expansion

log = get_logger("source")


class Expander(Protocol):
    def expand(self, identifier: str, name: str) -> Expansion: ...


@dataclass
class Series:
    """A compiled directive and the block of lines it owns."""

    directive: Directive
    start: int
    length: int
    symbols: tuple[str, ...]
    digest: str

    @property
    def end(self) -> int:
        return self.start + self.length

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


class Source:
    """Lines of one client file plus the series compiled into it."""

    def __init__(
        self,
        path: str,
        lines: list[str],
        series: list[Series] | None = None,
        *,
        terminated: bool = True,
    ) -> None:
        self.path = path
        self.lines = lines
        # False when the last line of the file has no LF
        self.terminated = terminated
        self.series = sorted(series or [], key=lambda s: s.start)

    @classmethod
    def from_file(cls, file: Path, path: str, series: list[Series] | None = None) -> Source:
        """Read file from disk; path is its repository key."""
        lines, terminated = split_lines(read_text(file))
        return cls(path, lines, series, terminated=terminated)

    @property
    def compiled(self) -> bool:
        return bool(self.series)

    def directives(self) -> list[tuple[int, Directive]]:
        """Uncompiled directives with their line index."""
        self._sync()
        found = []
        index = 0
        while index < len(self.lines):
            if (owner := self._owner(index)) is not None:
                index = owner.end
                continue
            if (directive := Directive.parse(self.lines[index])) is not None:
                found.append((index, directive))
            index += 1
        return found

    def compile(self, expander: Expander) -> int:
        """Expand every uncompiled directive; returns how many were expanded.

        Compiled blocks are skipped, so compiling twice changes nothing. A
        failing directive stops the pass with earlier expansions applied.
        """
        compiled = 0
        offset = 0
        for index, directive in self.directives():
            series = self._expand(index + offset, directive, expander)
            offset += series.length - 1
            compiled += 1
        return compiled

    def decompile(self) -> int:
        """Collapse every block back to its directive line.

        Returns the number of blocks collapsed. Edits inside a block are lost.
        """
        self._sync()
        collapsed = len(self.series)
        for series in reversed(self.series):
            block = self.lines[series.start : series.end]
            if digest(block) != series.digest:
                log.warning(
                    "edited_block_discarded",
                    path=self.path,
                    directive=series.directive.line,
                    start=series.start,
                )
            self.lines[series.start : series.end] = [series.directive.line]
        self.series = []
        if collapsed:
            log.debug("source_decompiled", path=self.path, series=collapsed)
        return collapsed

    def update(self, expander: Expander) -> int:
        """Decompile, then compile with current fragment content."""
        self.decompile()
        return self.compile(expander)

    def _expand(self, index: int, directive: Directive, expander: Expander) -> Series:
        expansion = expander.expand(directive.server, directive.symbol)
        block = directive.indented(expansion.lines)
        self._replace(index, 1, block)
        series = Series(
            directive=directive,
            start=index,
            length=len(block),
            symbols=expansion.symbols,
            digest=digest(block),
        )
        self.series.append(series)
        self.series.sort(key=lambda s: s.start)
        log.debug(
            "series_compiled",
            path=self.path,
            directive=directive.line,
            start=index,
            length=len(block),
            symbols=list(expansion.symbols),
        )
        return series

    def _replace(self, start: int, length: int, lines: list[str]) -> None:
        """Replace lines[start:start + length], shifting later series."""
        self.lines[start : start + length] = lines
        delta = len(lines) - length
        if not delta:
            return
        for series in self.series:
            if series.start >= start + length:
                series.start += delta

    def _owner(self, index: int) -> Series | None:
        for series in self.series:
            if series.start <= index < series.end:
                return series
        return None

    def _sync(self) -> None:
        claimed: list[Series] = []
        for series in self.series:
            series.start = self._locate(series, claimed)
            claimed.append(series)
        self.series.sort(key=lambda s: s.start)

    def _locate(self, series: Series, claimed: list[Series]) -> int:
        """Current start of a block, by content digest nearest to its record."""
        length = series.length
        last = max(len(self.lines) - length, 0)
        recorded = min(series.start, last)

        def free(start: int) -> bool:
            return not any(other.overlaps(start, start + length) for other in claimed)

        if digest(self.lines[recorded : recorded + length]) == series.digest and free(recorded):
            return recorded

        matches = [
            start
            for start in range(last + 1)
            if free(start) and digest(self.lines[start : start + length]) == series.digest
        ]
        if matches:
            found = min(matches, key=lambda start: abs(start - series.start))
            log.debug("series_relocated", path=self.path, old=series.start, new=found)
            return found

        log.debug("series_content_changed", path=self.path, start=recorded)
        return recorded
