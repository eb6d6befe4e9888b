"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (SPLICE__SECTION__KEY)
3. Project config (.splice/config.yaml) - minimal user-facing options
4. Global config (~/.config/splice/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from splice.config.constants import CONFIG_FILE, PROJECT_DIR
from splice.config.models import LoggingConfig, ServersConfig, SpliceConfig
from splice.config.user_config import load_user_config
from splice.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/splice/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class SpliceSettings(BaseSettings):
        """Root config. Env vars: SPLICE__LOGGING__LEVEL, SPLICE__SERVERS__DECLARATION, etc."""

        model_config = SettingsConfigDict(
            env_prefix="SPLICE__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        servers: ServersConfig = ServersConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return SpliceSettings


SpliceSettings = _make_settings_class({})


def load_config(project_root: Path | None = None, **kwargs: Any) -> SpliceConfig:
    """Load config: defaults < global config < project config < env vars < kwargs.

    Args:
        project_root: Project root holding .splice/. Defaults to the
                      current working directory.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()
    user_config = load_user_config(project_root / PROJECT_DIR / CONFIG_FILE)
    user_values = user_config.model_dump(exclude_unset=True)

    # Map user config fields to the internal config structure; only values
    # present in the file may shadow the global config.
    yaml_config: dict[str, Any] = {}
    if "paths" in user_values:
        yaml_config["servers"] = {"paths": user_values["paths"]}
    if "log_level" in user_values:
        yaml_config["logging"] = {"level": user_values["log_level"]}

    global_config = _load_yaml(GLOBAL_CONFIG_PATH)
    if global_config:
        yaml_config = _deep_merge(global_config, yaml_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return SpliceConfig.model_validate(settings.model_dump())
