"""Servers and their lookup by identifier.

A server identifier is an opaque string such as ``github.com/owner/repo``.
It names a directory under one of the configured search paths; identifiers
that are absolute or start with "." name a directory relative to the project
root instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from splice.config.constants import DECLARATION_FILE, SEPARATOR_LINE
from splice.core.errors import SymbolError
from splice.core.logging import get_logger
from splice.core.paths import find_dir
from splice.server.models import ServerDeclaration, load_declaration
from splice.server.symbols import SymbolRegistry

log = get_logger("catalog")


@dataclass(frozen=True)
class Expansion:
    """Resolved symbol names and their joined, unindented content."""

    symbols: tuple[str, ...]
    lines: tuple[str, ...]


class Server:
    """A server directory bound to its validated symbol registry."""

    def __init__(self, identifier: str, root: Path, declaration: ServerDeclaration) -> None:
        self.identifier = identifier
        self.root = root
        self.extension = declaration.extension
        self.registry = SymbolRegistry.from_declaration(declaration)

    @classmethod
    def load(cls, identifier: str, root: Path, declaration_file: str = DECLARATION_FILE) -> Server:
        """Load and validate the server at root.

        Raises:
            ConfigError: Malformed declaration file.
            SymbolError: CIRCULAR_REFERENCE in the declared graph.
        """
        return cls(identifier, root, load_declaration(root / declaration_file))

    def expand(self, name: str) -> Expansion:
        """Payloads of name and its dependencies, one blank line between blocks.

        Aggregator symbols without content of their own add no block.
        """
        if name not in self.registry:
            raise SymbolError.missing_symbol(name, server=self.identifier)

        symbols = self.registry.resolve(name)
        lines: list[str] = []
        for symbol in symbols:
            block = symbol.payload(self.root, self.extension)
            if not block:
                continue
            if lines:
                lines.append(SEPARATOR_LINE)
            lines.extend(block)

        return Expansion(
            symbols=tuple(symbol.name for symbol in symbols),
            lines=tuple(lines),
        )

    def __repr__(self) -> str:
        return f"Server({self.identifier!r}, {str(self.root)!r})"


class ServerCatalog:
    """Finds and caches servers for one project."""

    def __init__(
        self,
        search_paths: list[Path],
        *,
        project_root: Path,
        declaration_file: str = DECLARATION_FILE,
    ) -> None:
        self._search_paths = search_paths
        self._project_root = project_root
        self._declaration_file = declaration_file
        self._servers: dict[str, Server] = {}

    def locate(self, identifier: str) -> Path | None:
        """Directory of the server named by identifier, or None."""
        if Path(identifier).is_absolute() or identifier.startswith("."):
            return find_dir(identifier, base=self._project_root)

        for base in self._search_paths:
            if (found := find_dir(identifier, base=base)) is not None:
                return found
        return None

    def get(self, identifier: str) -> Server | None:
        if identifier in self._servers:
            return self._servers[identifier]

        root = self.locate(identifier)
        if root is None:
            return None

        server = Server.load(identifier, root, self._declaration_file)
        log.debug("server_loaded", server=identifier, root=str(root), symbols=len(server.registry))
        self._servers[identifier] = server
        return server

    def expand(self, identifier: str, name: str) -> Expansion:
        """Expand symbol name from the server named identifier.

        Raises:
            SymbolError: MISSING_SYMBOL for an unknown server or symbol, or any
                error raised while resolving and loading payloads.
        """
        server = self.get(identifier)
        if server is None:
            raise SymbolError.missing_symbol(name, server=identifier)
        return server.expand(name)
