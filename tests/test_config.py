"""Tests for launcher configuration loading."""

import tempfile
from pathlib import Path

import pytest

from grails_launcher.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONSOLE_CLASS,
    DEFAULT_SCRIPT_RUNNER_CLASS,
    DEFAULT_SETTINGS_CLASS,
    LauncherConfig,
    load_launcher_config,
    parse_launcher_config,
    resolve_config_path,
)
from grails_launcher.exceptions import ConfigLoadError


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def test_defaults():
    config = LauncherConfig()
    assert config.settings_class == DEFAULT_SETTINGS_CLASS
    assert config.console_class == DEFAULT_CONSOLE_CLASS
    assert config.script_runner_class == DEFAULT_SCRIPT_RUNNER_CLASS


def test_no_path_and_no_env_gives_defaults():
    assert resolve_config_path() is None
    assert load_launcher_config() == LauncherConfig()


def test_missing_file_gives_defaults(temp_dir):
    assert load_launcher_config(temp_dir / "absent.yaml") == LauncherConfig()


def test_load_top_level_keys(temp_dir):
    path = temp_dir / "launcher.yaml"
    path.write_text("settings_class: my.grails.Settings\n")

    config = load_launcher_config(path)

    assert config.settings_class == "my.grails.Settings"
    assert config.console_class == DEFAULT_CONSOLE_CLASS


def test_load_nested_section(temp_dir):
    path = temp_dir / "launcher.yaml"
    path.write_text("launcher:\n  script_runner_class: my.grails.Runner\n")

    assert load_launcher_config(path).script_runner_class == "my.grails.Runner"


def test_env_var_path(temp_dir, monkeypatch):
    path = temp_dir / "from_env.yaml"
    path.write_text("console_class: my.Console\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert resolve_config_path() == path
    assert load_launcher_config().console_class == "my.Console"


def test_explicit_path_wins_over_env(temp_dir, monkeypatch):
    env_path = temp_dir / "env.yaml"
    env_path.write_text("console_class: env.Console\n")
    explicit = temp_dir / "explicit.yaml"
    explicit.write_text("console_class: explicit.Console\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(env_path))

    assert load_launcher_config(explicit).console_class == "explicit.Console"


def test_empty_file_gives_defaults(temp_dir):
    path = temp_dir / "empty.yaml"
    path.write_text("")
    assert load_launcher_config(path) == LauncherConfig()


def test_invalid_yaml(temp_dir):
    path = temp_dir / "bad.yaml"
    path.write_text("settings_class: [unclosed\n")
    with pytest.raises(ConfigLoadError, match="Invalid YAML"):
        load_launcher_config(path)


def test_root_must_be_mapping():
    with pytest.raises(ConfigLoadError, match="Root must be a dict"):
        parse_launcher_config(["a", "b"])


def test_section_must_be_mapping():
    with pytest.raises(ConfigLoadError, match="launcher must be a dict"):
        parse_launcher_config({"launcher": "nope"})


def test_unknown_key_rejected():
    with pytest.raises(ConfigLoadError) as exc_info:
        parse_launcher_config({"settings_klass": "typo"}, file_name="launcher.yaml")
    assert exc_info.value.file_name == "launcher.yaml"


def test_config_is_frozen():
    config = LauncherConfig()
    with pytest.raises(Exception):
        config.settings_class = "other"
