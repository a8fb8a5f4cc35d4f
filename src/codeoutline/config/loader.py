"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (CODEOUTLINE__SECTION__KEY)
3. User config (.codeoutline/config.yaml) - minimal user-facing options
4. Global config (~/.config/codeoutline/config.yaml) - full structure
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from codeoutline.config.models import CodeOutlineConfig, LoggingConfig, SymbolsConfig
from codeoutline.config.user_config import load_user_config
from codeoutline.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/codeoutline/config.yaml").expanduser()


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

    class CodeOutlineSettings(BaseSettings):
        """Root config. Env vars: CODEOUTLINE__LOGGING__LEVEL, CODEOUTLINE__SYMBOLS__..., etc."""

        model_config = SettingsConfigDict(
            env_prefix="CODEOUTLINE__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        symbols: SymbolsConfig = SymbolsConfig()

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

    return CodeOutlineSettings


CodeOutlineSettings = _make_settings_class({})


def load_config(repo_root: Path | None = None, **kwargs: Any) -> CodeOutlineConfig:
    """Load config: defaults < global yaml < user config < env vars < kwargs.

    Args:
        repo_root: Repository root to load config from.
                   Defaults to current working directory.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    repo_root = repo_root or Path.cwd()
    user_config = load_user_config(repo_root / ".codeoutline" / "config.yaml")

    # Only values the user actually wrote may shadow the global config
    user_fields = user_config.model_dump(exclude_unset=True)
    yaml_config: dict[str, Any] = {}
    if "include_references" in user_fields:
        yaml_config["symbols"] = {"include_references": user_fields["include_references"]}
    if "log_level" in user_fields:
        yaml_config["logging"] = {"level": user_fields["log_level"]}

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
    return CodeOutlineConfig.model_validate(settings.model_dump())
