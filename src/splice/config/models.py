"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SPLICE__SECTION__KEY)
3. Project YAML (.splice/config.yaml)
4. Global YAML (~/.config/splice/config.yaml)
5. Built-in defaults (this file)

Examples:
    SPLICE__LOGGING__LEVEL=DEBUG
    SPLICE__SERVERS__DECLARATION=symbols.yaml
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from splice.config.constants import DECLARATION_FILE, DEFAULT_SERVER_PATHS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SPLICE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. User-facing output does not go through logging.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServersConfig(BaseModel):
    """Where server identifiers are looked up.

    Env vars:
        SPLICE__SERVERS__DECLARATION: Declaration file name at each server root
    """

    paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SERVER_PATHS),
        description="Search paths, in order, for server identifiers such as "
        "github.com/owner/repo.",
    )
    declaration: str = Field(
        default=DECLARATION_FILE,
        description="Symbol declaration file name at the root of every server.",
    )

    @field_validator("declaration")
    @classmethod
    def validate_declaration(cls, v: str) -> str:
        if not v or Path(v).name != v:
            raise ValueError(f"Declaration must be a bare file name, got {v!r}")
        return v

    def search_paths(self, project_root: Path) -> list[Path]:
        """Expanded search paths; relative entries are project-relative."""
        result = []
        for entry in self.paths:
            path = Path(entry).expanduser()
            result.append(path if path.is_absolute() else project_root / path)
        return result


class SpliceConfig(BaseModel):
    """Root configuration for splice."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    servers: ServersConfig = Field(default_factory=ServersConfig)
