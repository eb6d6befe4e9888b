"""Minimal user-facing configuration.

User config is stored in .splice/config.yaml. It only holds the options a
project owner may reasonably want to change; everything else uses defaults.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from splice.config.constants import DEFAULT_SERVER_PATHS
from splice.config.models import LogLevel
from splice.core.errors import ConfigError

DEFAULT_LOG_LEVEL: LogLevel = "WARNING"


class UserConfig(BaseModel):
    """User-facing configuration options."""

    model_config = ConfigDict(extra="forbid")

    paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SERVER_PATHS),
        description="Server search paths, tried in order.",
    )
    log_level: LogLevel = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Log level. DEBUG is very verbose.",
    )


def write_user_config(path: Path, config: UserConfig | None = None) -> None:
    """Write user config file with helpful comments."""
    cfg = config or UserConfig()

    lines = [
        "# splice configuration",
        "",
        "# Directories searched, in order, for server identifiers used in",
        "# directives (e.g. '... github.com/owner/repo symbol').",
        "# Relative entries are resolved against the project root.",
        "paths:",
    ]
    # safe_dump quotes entries YAML would otherwise read as non-strings
    lines.extend(f"  - {yaml.safe_dump(entry).splitlines()[0]}" for entry in cfg.paths)
    lines.append("")

    lines.append("# Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL")
    if cfg.log_level != DEFAULT_LOG_LEVEL:
        lines.append(f"log_level: {cfg.log_level}")
    else:
        lines.append(f"# log_level: {cfg.log_level}")
    lines.append("")

    path.write_text("\n".join(lines))


def load_user_config(path: Path) -> UserConfig:
    """Load user config from YAML file; defaults when the file is absent.

    Raises:
        ConfigError: On invalid YAML or unknown/invalid fields.
    """
    if not path.exists():
        return UserConfig()
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "expected a mapping at the root")
    try:
        return UserConfig(**data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
