"""Symbol registry and dependency resolution.

A registry is built from the declared symbols of one server. Dependencies
naming undeclared symbols register bare symbols on the fly; a bare symbol is a
leaf and must be backed by a file under the server root. Whether a symbol is a
leaf depends on its own declared dependencies only; the server-wide global
dependencies are resolved ahead of them but never make a symbol an aggregator.

Resolution is a depth-first post-order walk: every symbol comes after all of
its transitive dependencies and appears exactly once. The whole graph is
walked from every symbol at construction time, so a registry with a cycle is
never handed out.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from splice.core.errors import SymbolError
from splice.core.logging import get_logger
from splice.core.paths import read_lines
from splice.server.models import ServerDeclaration, SymbolDeclaration

log = get_logger("symbols")


class Symbol:
    """A named fragment, possibly composed of other symbols."""

    __slots__ = ("name", "path", "declared", "inherited", "_depends")

    def __init__(
        self,
        name: str,
        *,
        path: str | None = None,
        depends: Sequence[str] = (),
    ) -> None:
        self.name = name
        self.path = path
        self.declared = tuple(depends)
        # server-wide dependencies, resolved ahead of declared ones
        self.inherited: tuple[str, ...] = ()
        self._depends: list[Symbol] | None = None

    @classmethod
    def from_declaration(cls, declaration: SymbolDeclaration) -> Symbol:
        return cls(declaration.symbol, path=declaration.path, depends=declaration.depends or ())

    @property
    def built(self) -> bool:
        return self._depends is not None

    @property
    def depends(self) -> list[Symbol]:
        """Resolved dependencies; empty until the owning registry builds it."""
        return self._depends or []

    @property
    def leaf(self) -> bool:
        """True when the symbol depends on nothing but itself and globals."""
        return all(name == self.name for name in self.declared)

    def build(self, registry: SymbolRegistry) -> None:
        """Resolve declared names into symbols once, skipping self-references."""
        if self._depends is not None:
            return
        depends: list[Symbol] = []
        for name in dict.fromkeys((*self.inherited, *self.declared)):
            if name == self.name:
                continue
            depends.append(registry.register(name))
        self._depends = depends

    def payload(self, root: Path, extension: str | None = None) -> list[str]:
        """Content lines of this symbol under a server root.

        Raises:
            SymbolError: BOGUS_LEAF when a leaf has no backing file,
                EMPTY_PAYLOAD when the backing file is empty.
        """
        file = self._where(root, extension)
        if file is None:
            if self.leaf:
                raise SymbolError.bogus_leaf(self.name)
            return []

        lines = read_lines(file)
        if not lines:
            raise SymbolError.empty_payload(self.name, str(file))
        return lines

    def _where(self, root: Path, extension: str | None) -> Path | None:
        candidates: list[Path] = []
        if self.path:
            candidates.append(root / self.path)
        base = root / self.name
        if extension:
            candidates.append(base.with_name(f"{base.name}{extension}"))
        candidates.append(base)

        for candidate in candidates:
            if candidate.exists() and not candidate.is_dir():
                return candidate
        return None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


class _OpenPath:
    """Ordered set of symbols on the current walk path."""

    def __init__(self, root: Symbol) -> None:
        self._symbols: dict[str, Symbol] = {root.name: root}

    def __contains__(self, symbol: Symbol) -> bool:
        return symbol.name in self._symbols

    @contextmanager
    def hold(self, symbol: Symbol) -> Iterator[None]:
        self._symbols[symbol.name] = symbol
        try:
            yield
        finally:
            del self._symbols[symbol.name]


class SymbolRegistry:
    """Name to symbol mapping of one server, validated acyclic."""

    def __init__(
        self,
        declarations: Iterable[SymbolDeclaration] = (),
        *,
        depends: Sequence[str] = (),
    ) -> None:
        self._symbols: dict[str, Symbol] = {}
        self._build(list(declarations), list(dict.fromkeys(depends)))

    @classmethod
    def from_declaration(cls, declaration: ServerDeclaration) -> SymbolRegistry:
        return cls(declaration.symbols, depends=declaration.depends)

    def __getitem__(self, name: str) -> Symbol:
        try:
            return self._symbols[name]
        except KeyError:
            raise SymbolError.missing_symbol(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)

    @property
    def names(self) -> list[str]:
        return list(self._symbols)

    def lookup(self, name: str) -> Symbol:
        return self[name]

    def register(self, name: str) -> Symbol:
        """Return the symbol for name, registering a bare one if unknown."""
        return self._register(Symbol(name))

    def resolve(self, name: str) -> list[Symbol]:
        """Symbols to materialize for name, dependencies first, name last.

        Raises:
            SymbolError: MISSING_SYMBOL for an unknown name,
                CIRCULAR_REFERENCE for a cycle reachable from it.
        """
        symbol = self[name]
        resolved: list[Symbol] = []
        self._walk(symbol, _OpenPath(symbol), resolved, set())
        log.debug("symbol_resolved", symbol=name, order=[s.name for s in resolved])
        return resolved

    def _register(self, symbol: Symbol) -> Symbol:
        return self._symbols.setdefault(symbol.name, symbol)

    def _build(self, declarations: list[SymbolDeclaration], depends: list[str]) -> None:
        # Global dependencies go first for every declared symbol except the
        # globals themselves.
        for declaration in declarations:
            symbol = Symbol.from_declaration(declaration)
            if depends and declaration.symbol not in depends:
                symbol.inherited = tuple(depends)
            self._register(symbol)

        # Building registers undeclared dependencies, which need building too.
        pending = [symbol for symbol in self._symbols.values() if not symbol.built]
        while pending:
            for symbol in pending:
                symbol.build(self)
            pending = [symbol for symbol in self._symbols.values() if not symbol.built]

        for symbol in list(self._symbols.values()):
            self._walk(symbol, _OpenPath(symbol), [], set())

        log.debug("registry_built", symbols=len(self._symbols), globals=depends)

    def _walk(
        self,
        symbol: Symbol,
        opened: _OpenPath,
        resolved: list[Symbol],
        emitted: set[str],
    ) -> None:
        for depend in symbol.depends:
            # Closing back on the walk root or on any symbol still open.
            if depend in opened:
                raise SymbolError.circular_reference(symbol.name, depend.name)
            if depend.name in emitted:
                continue
            with opened.hold(depend):
                self._walk(depend, opened, resolved, emitted)

        resolved.append(symbol)
        emitted.add(symbol.name)
