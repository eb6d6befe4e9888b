"""Core module exports."""

from splice.core.errors import (
    ConfigError,
    ErrorCode,
    PathError,
    SpliceError,
    SymbolError,
)
from splice.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from splice.core.progress import spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "PathError",
    "SpliceError",
    "SymbolError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "spinner",
    "status",
]
