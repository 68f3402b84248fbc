"""The launch context interface shared by every context implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from grails_launcher.version import GrailsVersion

# Property groups, in the order they are copied between contexts.
DIRECTORY_PROPERTIES = (
    "grails_work_dir",
    "project_work_dir",
    "classes_dir",
    "test_classes_dir",
    "test_reports_dir",
    "resources_dir",
    "project_plugins_dir",
    "global_plugins_dir",
)

DEPENDENCY_PROPERTIES = (
    "compile_dependencies",
    "test_dependencies",
    "provided_dependencies",
    "runtime_dependencies",
    "build_dependencies",
)

LOCAL_PROPERTIES = ("script_name", "args", "env")


def _abstract_property(doc: str) -> property:
    @abstractmethod
    def fget(self):
        raise NotImplementedError

    @abstractmethod
    def fset(self, value):
        raise NotImplementedError

    return property(fget, fset, doc=doc)


class GrailsLaunchContext(ABC):
    """Everything needed to run one Grails script.

    Directory properties hold ``Path`` values, dependency properties hold
    lists of ``Path``. Any property that was never set reads back as whatever
    the underlying storage holds by default, usually ``None``.
    """

    @property
    @abstractmethod
    def grails_version(self) -> GrailsVersion:
        """Version of the Grails build this context targets."""

    grails_home: Optional[Path] = _abstract_property("Grails installation directory.")
    base_dir: Optional[Path] = _abstract_property("Project base directory.")

    script_name: Optional[str] = _abstract_property("Name of the script to run, e.g. ``TestApp``.")
    env: Optional[str] = _abstract_property("Grails environment, or None for the script default.")
    args: Optional[str] = _abstract_property("Raw argument string passed to the script.")

    grails_work_dir: Optional[Path] = _abstract_property("Global work directory.")
    project_work_dir: Optional[Path] = _abstract_property("Per-project work directory.")
    classes_dir: Optional[Path] = _abstract_property("Compiled main classes.")
    test_classes_dir: Optional[Path] = _abstract_property("Compiled test classes.")
    resources_dir: Optional[Path] = _abstract_property("Processed resources.")
    test_reports_dir: Optional[Path] = _abstract_property("Test report output.")
    project_plugins_dir: Optional[Path] = _abstract_property("Plugins installed for the project.")
    global_plugins_dir: Optional[Path] = _abstract_property("Plugins installed for every project.")

    compile_dependencies: Optional[List[Path]] = _abstract_property("Compile classpath.")
    test_dependencies: Optional[List[Path]] = _abstract_property("Test classpath.")
    provided_dependencies: Optional[List[Path]] = _abstract_property("Container-provided classpath.")
    runtime_dependencies: Optional[List[Path]] = _abstract_property("Runtime classpath.")
    build_dependencies: Optional[List[Path]] = _abstract_property("Build system classpath.")

    dependencies_externally_configured: bool = _abstract_property(
        "True when dependency resolution is done outside Grails."
    )
    plain_output: bool = _abstract_property("True to disable ANSI colored console output.")


__all__ = [
    "DEPENDENCY_PROPERTIES",
    "DIRECTORY_PROPERTIES",
    "LOCAL_PROPERTIES",
    "GrailsLaunchContext",
]
