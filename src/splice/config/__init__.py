"""Config module exports."""

from splice.config.loader import SpliceSettings, load_config
from splice.config.models import (
    LoggingConfig,
    ServersConfig,
    SpliceConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "ServersConfig",
    "SpliceConfig",
    "SpliceSettings",
]
