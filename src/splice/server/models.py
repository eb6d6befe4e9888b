"""Server declaration models.

A server root carries a declaration file (splice.yaml by default)::

    depends: [z]
    extension: .sh
    symbols:
      - symbol: a
        depends: [b, c]
      - symbol: b
        path: lib/b.sh

Unknown keys are rejected at every level.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from splice.core.errors import ConfigError


class SymbolDeclaration(BaseModel):
    """One declared symbol."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    symbol: str = Field(min_length=1)
    path: str | None = None
    depends: list[str] | None = None

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        if v != v.strip() or any(c.isspace() for c in v):
            raise ValueError(f"Symbol names cannot contain whitespace: {v!r}")
        return v

    def __str__(self) -> str:
        return self.symbol


class ServerDeclaration(BaseModel):
    """Parsed server declaration file."""

    model_config = ConfigDict(extra="forbid")

    depends: list[str] = Field(default_factory=list)
    extension: str | None = None
    symbols: list[SymbolDeclaration] = Field(default_factory=list)

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str | None) -> str | None:
        if v and not v.startswith("."):
            return f".{v}"
        return v or None


def load_declaration(path: Path) -> ServerDeclaration:
    """Load a server declaration; an absent file declares nothing.

    Raises:
        ConfigError: On invalid YAML or unknown/invalid fields.
    """
    if not path.exists():
        return ServerDeclaration()
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "expected a mapping at the root")
    try:
        return ServerDeclaration.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
