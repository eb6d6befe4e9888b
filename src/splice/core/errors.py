"""splice error types with typed error codes.

Error code ranges:
- 2xxx: Config and project state
- 3xxx: Symbols
- 4xxx: Paths
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    PROJECT_NOT_INITIALIZED = 2005

    # Symbols (3xxx)
    CIRCULAR_REFERENCE = 3001
    MISSING_SYMBOL = 3002
    BOGUS_LEAF = 3003
    EMPTY_PAYLOAD = 3004

    # Paths (4xxx)
    PATH_MISSING_BASE = 4001
    PATH_WRONG_BASE = 4002
    PATH_MISSING = 4003
    PATH_NOT_FILE = 4004
    PATH_NOT_DIR = 4005


# Not frozen: contextlib assigns __traceback__ on exceptions crossing a
# generator-based context manager.
@dataclass(eq=False)
class SpliceError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'MISSING_SYMBOL')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SpliceError):
    """Configuration and project state errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def not_initialized(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.PROJECT_NOT_INITIALIZED,
            message=f"Not inside a splice project: {path}",
            details={"path": path},
        )


class SymbolError(SpliceError):
    """Symbol graph and fragment errors. Never retryable."""

    @classmethod
    def circular_reference(cls, source: str, target: str) -> "SymbolError":
        return cls(
            code=ErrorCode.CIRCULAR_REFERENCE,
            message=f"Circular reference from {source} to {target}",
            details={"source": source, "target": target},
        )

    @classmethod
    def missing_symbol(cls, symbol: str, server: str | None = None) -> "SymbolError":
        details: dict[str, Any] = {"symbol": symbol}
        if server is not None:
            details["server"] = server
            message = f"Missing symbol: {symbol} (server {server})"
        else:
            message = f"Missing symbol: {symbol}"
        return cls(code=ErrorCode.MISSING_SYMBOL, message=message, details=details)

    @classmethod
    def bogus_leaf(cls, symbol: str) -> "SymbolError":
        return cls(
            code=ErrorCode.BOGUS_LEAF,
            message=f"No source found for leaf symbol: {symbol}",
            details={"symbol": symbol},
        )

    @classmethod
    def empty_payload(cls, symbol: str, path: str) -> "SymbolError":
        return cls(
            code=ErrorCode.EMPTY_PAYLOAD,
            message=f"Empty source for symbol: {symbol}",
            details={"symbol": symbol, "path": path},
        )


class PathError(SpliceError):
    """Path sanitization errors, always carrying the offending path."""

    _KINDS = {
        ErrorCode.PATH_MISSING_BASE: "Directory not found",
        ErrorCode.PATH_WRONG_BASE: "Not a directory",
        ErrorCode.PATH_MISSING: "File or directory not found",
        ErrorCode.PATH_NOT_FILE: "Not a file",
        ErrorCode.PATH_NOT_DIR: "Not a directory",
    }

    @classmethod
    def of(cls, code: ErrorCode, path: str) -> "PathError":
        if code not in cls._KINDS:
            raise ValueError(f"Not a path error code: {code!r}")
        return cls(
            code=code,
            message=f"{cls._KINDS[code]}: {path}",
            details={"path": path},
        )

    @property
    def path(self) -> str:
        return str(self.details["path"])

