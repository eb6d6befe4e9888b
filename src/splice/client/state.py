"""Persisted project state: the series compiled into each tracked file.

Stored in .splice/state.yaml. Series cannot be derived back from file content
(an expanded block does not say which directive produced it), so decompile and
update after a restart depend on this snapshot.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from splice.client.directive import Directive
from splice.client.source import Series
from splice.config.constants import STATE_VERSION
from splice.core.errors import ConfigError

STATE_HEADER = """\
# AUTO-GENERATED - DO NOT EDIT MANUALLY
# Series compiled into tracked files of this project.
# Run 'splice decompile' on a file to stop tracking it.

"""


class SeriesRecord(BaseModel):
    """One compiled directive occurrence."""

    model_config = ConfigDict(extra="forbid")

    directive: str
    start: int = Field(ge=0)
    length: int = Field(ge=0)
    symbols: list[str]
    digest: str = Field(min_length=64, max_length=64)


class SourceRecord(BaseModel):
    """Series of one tracked file, keyed by its project-relative path."""

    model_config = ConfigDict(extra="forbid")

    source: str
    series: list[SeriesRecord] = Field(default_factory=list)


class State(BaseModel):
    """Whole-project snapshot."""

    model_config = ConfigDict(extra="forbid")

    version: int = STATE_VERSION
    sources: list[SourceRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sources)


def to_record(series: Series) -> SeriesRecord:
    return SeriesRecord(
        directive=series.directive.line,
        start=series.start,
        length=series.length,
        symbols=list(series.symbols),
        digest=series.digest,
    )


def from_record(record: SeriesRecord) -> Series:
    """Rebuild a series from its record.

    Raises:
        ConfigError: The recorded directive line is not a directive.
    """
    directive = Directive.parse(record.directive)
    if directive is None:
        raise ConfigError.invalid_value("directive", record.directive, "not a directive line")
    return Series(
        directive=directive,
        start=record.start,
        length=record.length,
        symbols=tuple(record.symbols),
        digest=record.digest,
    )


def load_state(path: Path) -> State:
    """Load state; an absent file is an empty state.

    Raises:
        ConfigError: On invalid YAML, unknown fields, or an unsupported version.
    """
    if not path.exists():
        return State()
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "expected a mapping at the root")
    try:
        state = State.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    if state.version != STATE_VERSION:
        raise ConfigError.invalid_value(
            "version", state.version, f"unsupported state version (expected {STATE_VERSION})"
        )
    return state


def write_state(path: Path, state: State) -> None:
    """Write state with warning header."""
    data = state.model_dump()
    content = STATE_HEADER + yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    path.write_text(content)
