"""Launcher configuration.

Holds the names of the target framework classes the launcher resolves
through its class loader. Values come from a YAML file (explicit path or the
``GRAILS_LAUNCHER_CONFIG`` environment variable) and fall back to the
framework's canonical class names.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from grails_launcher.exceptions import ConfigLoadError

CONFIG_ENV_VAR = "GRAILS_LAUNCHER_CONFIG"

DEFAULT_SETTINGS_CLASS = "grails.util.BuildSettings"
DEFAULT_CONSOLE_CLASS = "grails.build.logging.GrailsConsole"
DEFAULT_SCRIPT_RUNNER_CLASS = "org.codehaus.groovy.grails.cli.GrailsScriptRunner"


class LauncherConfig(BaseModel):
    """Class names used to drive a Grails build."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    settings_class: str = DEFAULT_SETTINGS_CLASS
    console_class: str = DEFAULT_CONSOLE_CLASS
    script_runner_class: str = DEFAULT_SCRIPT_RUNNER_CLASS


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Return the configuration file to read, if any.

    Priority:
        1. Explicit ``path`` argument.
        2. ``GRAILS_LAUNCHER_CONFIG`` environment variable.
    """
    if path is not None:
        return Path(path).expanduser()

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return None


def load_launcher_config(path: Optional[Union[str, Path]] = None) -> LauncherConfig:
    """Load launcher configuration.

    A missing file yields the defaults. Keys may be given at the top level
    or nested under a ``launcher:`` mapping.

    Args:
        path: Optional path to a YAML configuration file

    Returns:
        LauncherConfig

    Raises:
        ConfigLoadError: If the file exists but is not valid configuration
    """
    config_path = resolve_config_path(path)
    if config_path is None or not config_path.exists():
        return LauncherConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(config_path.name, f"Invalid YAML: {e}")
    except OSError as e:
        raise ConfigLoadError(config_path.name, str(e))

    return parse_launcher_config(data, file_name=config_path.name)


def parse_launcher_config(data: Any, file_name: str = "<config>") -> LauncherConfig:
    """Build a LauncherConfig from already-parsed YAML data."""
    if not isinstance(data, dict):
        raise ConfigLoadError(file_name, "Root must be a dict")

    section: Dict[str, Any] = data.get("launcher", data)
    if not isinstance(section, dict):
        raise ConfigLoadError(file_name, "launcher must be a dict")

    try:
        return LauncherConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigLoadError(file_name, str(e))


__all__ = [
    "CONFIG_ENV_VAR",
    "LauncherConfig",
    "load_launcher_config",
    "parse_launcher_config",
    "resolve_config_path",
]
