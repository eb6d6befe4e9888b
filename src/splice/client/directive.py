"""Directive line syntax.

A directive is a whole line ``<indent>... <server> <symbol>``. The indent is
kept verbatim and prefixed to every non-blank line of the expansion. Lines are
LF-separated; a directive ending in CR (a CRLF file) gives every expanded line
the same CR, whatever the fragment files use.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from splice.config.constants import DIRECTIVE_MARKER

_DIRECTIVE_RE = re.compile(
    rf"^(?P<indent>[ \t]*){re.escape(DIRECTIVE_MARKER)}"
    r"[ \t]+(?P<server>\S+)[ \t]+(?P<symbol>\S+)[ \t]*\r?$"
)


@dataclass(frozen=True)
class Directive:
    """One parsed directive line."""

    line: str
    indent: str
    server: str
    symbol: str

    @classmethod
    def parse(cls, line: str) -> Directive | None:
        match = _DIRECTIVE_RE.match(line)
        if match is None:
            return None
        return cls(
            line=line,
            indent=match["indent"],
            server=match["server"],
            symbol=match["symbol"],
        )

    @classmethod
    def of(cls, server: str, symbol: str, *, indent: str = "") -> Directive:
        return cls(
            line=f"{indent}{DIRECTIVE_MARKER} {server} {symbol}",
            indent=indent,
            server=server,
            symbol=symbol,
        )

    def indented(self, lines: Iterable[str]) -> list[str]:
        """Prefix the indent to every non-blank line, matching the line ending."""
        cr = "\r" if self.line.endswith("\r") else ""
        result = []
        for line in lines:
            body = line.removesuffix("\r")
            result.append(f"{self.indent}{body}{cr}" if body.strip() else f"{body}{cr}")
        return result

    def __str__(self) -> str:
        return self.line
