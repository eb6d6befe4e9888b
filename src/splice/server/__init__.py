"""Server side: declarations, symbol graph, fragment lookup."""

from splice.server.catalog import Expansion, Server, ServerCatalog
from splice.server.models import ServerDeclaration, SymbolDeclaration, load_declaration
from splice.server.symbols import Symbol, SymbolRegistry

__all__ = [
    "Expansion",
    "Server",
    "ServerCatalog",
    "ServerDeclaration",
    "Symbol",
    "SymbolDeclaration",
    "SymbolRegistry",
    "load_declaration",
]
