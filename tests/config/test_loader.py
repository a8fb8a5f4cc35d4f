"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: defaults < global yaml < user config < env < kwargs
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from codeoutline.config.loader import (
    GLOBAL_CONFIG_PATH,
    _deep_merge,
    _load_yaml,
    load_config,
)
from codeoutline.core.errors import ConfigError


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("symbols:\n  include_references: true\n")

        assert _load_yaml(yaml_file) == {"symbols": {"include_references": True}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1}, {"a": 2}) == {"a": 2}

    def test_nested_merge(self) -> None:
        base = {"logging": {"level": "INFO", "outputs": []}}
        override = {"logging": {"level": "DEBUG"}}

        assert _deep_merge(base, override) == {"logging": {"level": "DEBUG", "outputs": []}}

    def test_does_not_mutate_base(self) -> None:
        base = {"symbols": {"include_references": False}}
        _deep_merge(base, {"symbols": {"include_references": True}})

        assert base == {"symbols": {"include_references": False}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        with patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.symbols.include_references is False
        assert config.logging.level == "INFO"

    def test_loads_user_config(self, tmp_path: Path) -> None:
        user_file = tmp_path / ".codeoutline" / "config.yaml"
        user_file.parent.mkdir()
        user_file.write_text("include_references: true\nlog_level: DEBUG\n")

        with patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.symbols.include_references is True
        assert config.logging.level == "DEBUG"

    def test_global_config_applies_when_user_config_silent(self, tmp_path: Path) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("symbols:\n  include_references: true\n")

        with patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.symbols.include_references is True

    def test_user_config_overrides_global(self, tmp_path: Path) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("logging:\n  level: ERROR\n")
        user_file = tmp_path / ".codeoutline" / "config.yaml"
        user_file.parent.mkdir()
        user_file.write_text("log_level: WARNING\n")

        with patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.logging.level == "WARNING"

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        user_file = tmp_path / ".codeoutline" / "config.yaml"
        user_file.parent.mkdir()
        user_file.write_text("include_references: false\n")

        with (
            patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"CODEOUTLINE__SYMBOLS__INCLUDE_REFERENCES": "true"}),
        ):
            config = load_config(tmp_path)

        assert config.symbols.include_references is True

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        with patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path, logging={"level": "ERROR"})

        assert config.logging.level == "ERROR"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        with (
            patch("codeoutline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path, logging={"level": "LOUD"})

        assert "logging" in exc_info.value.details["field"]


class TestGlobalConfigPath:
    def test_is_in_user_config(self) -> None:
        assert GLOBAL_CONFIG_PATH.parts[-3:] == (".config", "codeoutline", "config.yaml")
