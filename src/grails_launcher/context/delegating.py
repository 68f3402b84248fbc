"""Launch context backed by a Grails ``BuildSettings`` object.

The settings class is only known at runtime: it is resolved by name through
the class loader of the Grails version being launched. Every delegated
property is a dynamic call on that object, and every failure of such a call
surfaces as ``InvocationError``.

Storage by property:

* directories, dependency lists and the externally-configured flag live in
  the settings object;
* ``script_name``, ``env`` and ``args`` always live in this context;
* ``build_dependencies`` lives in the settings object only for versions that
  support it, otherwise in this context;
* ``plain_output`` is read from and written to the Grails console singleton.
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

from grails_launcher.config import LauncherConfig
from grails_launcher.context.base import (
    DIRECTORY_PROPERTIES,
    LOCAL_PROPERTIES,
    GrailsLaunchContext,
)
from grails_launcher.exceptions import ContextConstructionError
from grails_launcher.loader import ClassLoader
from grails_launcher.quirks import Capability, GrailsVersionQuirks
from grails_launcher.reflection import invoke_method, invoke_method_wrap_exception, new_instance
from grails_launcher.version import GrailsVersion

logger = logging.getLogger(__name__)

PATH_TYPE = (str, os.PathLike)

# Value reported by plain_output when the console cannot be reached.
PLAIN_OUTPUT_DEFAULT = True

_NON_INTERACTIVE_FLAG = re.compile(r"(?:^|\s)--?non-interactive(?=\s|$)")


def is_interactive_args(args: Optional[str]) -> bool:
    """Return False if ``args`` holds a ``--non-interactive`` (or ``-non-interactive``) token."""
    return args is None or _NON_INTERACTIVE_FLAG.search(args) is None


class _SettingsProperty:
    """A property read and written through the build settings object."""

    def __init__(self, param_type: Any, getter: Optional[str] = None, setter: Optional[str] = None) -> None:
        self.param_type = param_type
        self.getter = getter
        self.setter = setter

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.getter = self.getter or f"get_{name}"
        self.setter = self.setter or f"set_{name}"

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return invoke_method_wrap_exception(instance.settings, self.getter)

    def __set__(self, instance: Any, value: Any) -> None:
        invoke_method_wrap_exception(instance.settings, self.setter, (self.param_type,), (value,))


class _BuildDependencyStorage(ABC):
    @abstractmethod
    def get(self) -> Optional[List[Path]]:
        ...

    @abstractmethod
    def set(self, dependencies: Optional[List[Path]]) -> None:
        ...


class _SettingsBuildDependencies(_BuildDependencyStorage):
    """Build dependencies held by a settings object that knows about them."""

    def __init__(self, settings: Any) -> None:
        self._settings = settings

    def get(self) -> Optional[List[Path]]:
        return invoke_method_wrap_exception(self._settings, "get_build_dependencies")

    def set(self, dependencies: Optional[List[Path]]) -> None:
        invoke_method_wrap_exception(self._settings, "set_build_dependencies", (list,), (dependencies,))


class _FallbackBuildDependencies(_BuildDependencyStorage):
    """Local build dependencies for versions whose settings have none."""

    def __init__(self) -> None:
        self._dependencies: Optional[List[Path]] = None

    def get(self) -> Optional[List[Path]]:
        return self._dependencies

    def set(self, dependencies: Optional[List[Path]]) -> None:
        self._dependencies = dependencies


class DelegatingGrailsLaunchContext(GrailsLaunchContext):
    """Launch context that keeps its state in a Grails ``BuildSettings``."""

    def __init__(
        self,
        grails_version: GrailsVersion,
        class_loader: ClassLoader,
        grails_home: Optional[Path],
        base_dir: Optional[Path],
        config: Optional[LauncherConfig] = None,
    ) -> None:
        self._grails_version = grails_version
        self._quirks = GrailsVersionQuirks(grails_version)
        self._class_loader = class_loader
        self._config = config or LauncherConfig()

        self._script_name: Optional[str] = None
        self._env: Optional[str] = None
        self._args: Optional[str] = None

        settings_class_name = self._config.settings_class
        try:
            settings_class = class_loader.load_class(settings_class_name)
            settings = new_instance(settings_class, (PATH_TYPE, PATH_TYPE), (grails_home, base_dir))
            invoke_method(settings, "set_root_loader", (ClassLoader,), (class_loader,))
        except Exception as e:
            raise ContextConstructionError(settings_class_name, e) from e

        self._settings = settings

        if self._quirks.supports(Capability.BUILD_DEPENDENCIES):
            self._build_dependencies: _BuildDependencyStorage = _SettingsBuildDependencies(settings)
        else:
            self._build_dependencies = _FallbackBuildDependencies()

        logger.debug("Created launch context for Grails %s (%r)", grails_version, self._quirks)

    @classmethod
    def copy_of(
        cls,
        class_loader: ClassLoader,
        source: GrailsLaunchContext,
        config: Optional[LauncherConfig] = None,
    ) -> "DelegatingGrailsLaunchContext":
        """Create a context on ``class_loader`` holding the same values as ``source``.

        Properties that are None on the source are left at the new context's
        own defaults. When the target version has no separate provided
        scope, provided dependencies are prepended to the compile dependencies.
        A source whose own version has no provided scope contributes no
        provided dependencies.

        Args:
            class_loader: Loader for the Grails version to launch
            source: Context to copy from
            config: Optional class name configuration

        Returns:
            New DelegatingGrailsLaunchContext
        """
        context = cls(
            source.grails_version,
            class_loader,
            source.grails_home,
            source.base_dir,
            config=config,
        )

        context.dependencies_externally_configured = source.dependencies_externally_configured
        context.plain_output = source.plain_output

        for name in LOCAL_PROPERTIES:
            _copy_if_set(source, context, name)

        _copy_if_set(source, context, "build_dependencies")

        if context.quirks.supports(Capability.PROVIDED_DEPENDENCIES):
            provided = provided_dependencies_of(source)
            if provided is not None:
                context.provided_dependencies = provided
            _copy_if_set(source, context, "compile_dependencies")
        else:
            provided = provided_dependencies_of(source)
            compile_ = source.compile_dependencies
            if provided is not None or compile_ is not None:
                context.compile_dependencies = list(provided or []) + list(compile_ or [])

        for name in ("runtime_dependencies", "test_dependencies"):
            _copy_if_set(source, context, name)

        for name in DIRECTORY_PROPERTIES:
            _copy_if_set(source, context, name)

        return context

    @property
    def grails_version(self) -> GrailsVersion:
        return self._grails_version

    @property
    def quirks(self) -> GrailsVersionQuirks:
        return self._quirks

    @property
    def settings(self) -> Any:
        """The underlying ``BuildSettings`` instance."""
        return self._settings

    grails_home = _SettingsProperty(PATH_TYPE)
    base_dir = _SettingsProperty(PATH_TYPE)

    grails_work_dir = _SettingsProperty(PATH_TYPE)
    project_work_dir = _SettingsProperty(PATH_TYPE)
    classes_dir = _SettingsProperty(PATH_TYPE)
    test_classes_dir = _SettingsProperty(PATH_TYPE)
    resources_dir = _SettingsProperty(PATH_TYPE)
    test_reports_dir = _SettingsProperty(PATH_TYPE)
    project_plugins_dir = _SettingsProperty(PATH_TYPE)
    global_plugins_dir = _SettingsProperty(PATH_TYPE)

    compile_dependencies = _SettingsProperty(list)
    test_dependencies = _SettingsProperty(list)
    provided_dependencies = _SettingsProperty(list)
    runtime_dependencies = _SettingsProperty(list)

    dependencies_externally_configured = _SettingsProperty(
        bool, getter="is_dependencies_externally_configured"
    )

    @property
    def build_dependencies(self) -> Optional[List[Path]]:
        return self._build_dependencies.get()

    @build_dependencies.setter
    def build_dependencies(self, dependencies: Optional[List[Path]]) -> None:
        self._build_dependencies.set(dependencies)

    @property
    def script_name(self) -> Optional[str]:
        return self._script_name

    @script_name.setter
    def script_name(self, script_name: Optional[str]) -> None:
        self._script_name = script_name

    @property
    def env(self) -> Optional[str]:
        return self._env

    @env.setter
    def env(self, env: Optional[str]) -> None:
        self._env = env

    @property
    def args(self) -> Optional[str]:
        return self._args

    @args.setter
    def args(self, args: Optional[str]) -> None:
        self._args = args

    @property
    def plain_output(self) -> bool:
        console = self._console()
        if console is None:
            return PLAIN_OUTPUT_DEFAULT
        try:
            return not invoke_method(console, "is_ansi_enabled")
        except Exception as e:
            logger.debug("Console does not report ANSI state, assuming plain output: %s", e)
            return PLAIN_OUTPUT_DEFAULT

    @plain_output.setter
    def plain_output(self, plain: bool) -> None:
        console = self._console()
        if console is None:
            return
        try:
            invoke_method(console, "set_ansi_enabled", (bool,), (not plain,))
        except Exception as e:
            logger.debug("Console does not accept ANSI state, ignoring plain output: %s", e)

    def _console(self) -> Optional[Any]:
        """Return the Grails console singleton, or None if this version has none."""
        try:
            console_class = self._class_loader.load_class(self._config.console_class)
            return invoke_method(console_class, "get_instance")
        except Exception as e:
            logger.debug("No Grails console available for %s: %s", self._grails_version, e)
            return None

    def _is_interactive_mode(self) -> bool:
        return is_interactive_args(self.args)

    def launch(self) -> int:
        """Run the configured script and return its exit status.

        Failures are not wrapped: they mean the build failed or could not be
        started.
        """
        runner_class = self._class_loader.load_class(self._config.script_runner_class)
        runner = new_instance(runner_class, (type(self._settings),), (self._settings,))

        interactive = self._is_interactive_mode()
        invoke_method(runner, "set_interactive", (bool,), (interactive,))

        if self.env is None:
            param_types: tuple = (str, str)
            params: tuple = (self.script_name, self.args)
        else:
            param_types = (str, str, str)
            params = (self.script_name, self.args, self.env)

        logger.info(
            "Launching Grails %s script %s (env=%s, interactive=%s)",
            self._grails_version,
            self.script_name,
            self.env,
            interactive,
        )
        return int(invoke_method(runner, "execute_command", param_types, params))


def provided_dependencies_of(source: GrailsLaunchContext) -> Optional[List[Path]]:
    """Provided dependencies of ``source``, or None when its settings have no provided scope."""
    if isinstance(source, DelegatingGrailsLaunchContext) and not source.quirks.supports(
        Capability.PROVIDED_DEPENDENCIES
    ):
        return None
    return source.provided_dependencies


def _copy_if_set(source: GrailsLaunchContext, target: GrailsLaunchContext, name: str) -> None:
    value = getattr(source, name)
    if value is not None:
        setattr(target, name, value)


__all__ = [
    "DelegatingGrailsLaunchContext",
    "PLAIN_OUTPUT_DEFAULT",
    "is_interactive_args",
]
