"""In-memory launch context that can be written to and read from YAML.

Used to prepare a launch before the target Grails class loader exists, for
example to hand configuration to a forked process, which then rebuilds a
delegating context with ``DelegatingGrailsLaunchContext.copy_of``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_serializer, field_validator

from grails_launcher.context.base import (
    DEPENDENCY_PROPERTIES,
    DIRECTORY_PROPERTIES,
    LOCAL_PROPERTIES,
    GrailsLaunchContext,
)
from grails_launcher.context.delegating import provided_dependencies_of
from grails_launcher.exceptions import SnapshotLoadError
from grails_launcher.version import GrailsVersion

SNAPSHOT_PROPERTIES = (
    ("grails_home", "base_dir")
    + LOCAL_PROPERTIES
    + DIRECTORY_PROPERTIES
    + DEPENDENCY_PROPERTIES
    + ("dependencies_externally_configured", "plain_output")
)


class LaunchContextSnapshot(BaseModel):
    """Every value of a launch context."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    grails_version: GrailsVersion

    grails_home: Optional[Path] = None
    base_dir: Optional[Path] = None

    script_name: Optional[str] = None
    env: Optional[str] = None
    args: Optional[str] = None

    grails_work_dir: Optional[Path] = None
    project_work_dir: Optional[Path] = None
    classes_dir: Optional[Path] = None
    test_classes_dir: Optional[Path] = None
    resources_dir: Optional[Path] = None
    test_reports_dir: Optional[Path] = None
    project_plugins_dir: Optional[Path] = None
    global_plugins_dir: Optional[Path] = None

    compile_dependencies: Optional[List[Path]] = None
    test_dependencies: Optional[List[Path]] = None
    provided_dependencies: Optional[List[Path]] = None
    runtime_dependencies: Optional[List[Path]] = None
    build_dependencies: Optional[List[Path]] = None

    dependencies_externally_configured: bool = False
    plain_output: bool = False

    @field_validator("grails_version", mode="before")
    @classmethod
    def parse_version_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return GrailsVersion.parse(value)
        return value

    @field_serializer("grails_version")
    def serialize_version(self, value: GrailsVersion) -> str:
        return str(value)


def _snapshot_property(name: str) -> property:
    def fget(self: "SerializableGrailsLaunchContext") -> Any:
        return getattr(self._snapshot, name)

    def fset(self: "SerializableGrailsLaunchContext", value: Any) -> None:
        try:
            setattr(self._snapshot, name, value)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {name}: {e}") from e

    return property(fget, fset, doc=getattr(GrailsLaunchContext, name).__doc__)


class SerializableGrailsLaunchContext(GrailsLaunchContext):
    """Launch context that keeps every value locally."""

    def __init__(
        self,
        grails_version: GrailsVersion,
        grails_home: Optional[Path] = None,
        base_dir: Optional[Path] = None,
    ) -> None:
        self._snapshot = LaunchContextSnapshot(
            grails_version=grails_version,
            grails_home=grails_home,
            base_dir=base_dir,
        )

    @classmethod
    def copy_of(cls, source: GrailsLaunchContext) -> "SerializableGrailsLaunchContext":
        """Capture the current values of any launch context."""
        context = cls(source.grails_version)
        for name in SNAPSHOT_PROPERTIES:
            if name == "provided_dependencies":
                value = provided_dependencies_of(source)
            else:
                value = getattr(source, name)
            if value is not None:
                setattr(context, name, value)
        return context

    @classmethod
    def from_snapshot(cls, snapshot: LaunchContextSnapshot) -> "SerializableGrailsLaunchContext":
        context = cls(snapshot.grails_version)
        context._snapshot = snapshot.model_copy(deep=True)
        return context

    def to_snapshot(self) -> LaunchContextSnapshot:
        return self._snapshot.model_copy(deep=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SerializableGrailsLaunchContext":
        """Create from a plain dict as produced by :meth:`to_dict`.

        Raises:
            ValueError: If the data does not describe a launch context
        """
        try:
            snapshot = LaunchContextSnapshot.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid launch context: {e}") from e
        return cls.from_snapshot(snapshot)

    def to_dict(self) -> Dict[str, Any]:
        """Return a YAML/JSON safe dict; paths become strings."""
        return self._snapshot.model_dump(mode="json")

    def dump(self, path: Union[str, Path]) -> Path:
        """Write this context to a YAML file and return its path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SerializableGrailsLaunchContext":
        """Read a context written by :meth:`dump`.

        Raises:
            SnapshotLoadError: If the file is missing or invalid
        """
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SnapshotLoadError(path.name, f"Invalid YAML: {e}")
        except OSError as e:
            raise SnapshotLoadError(path.name, str(e))

        if not isinstance(data, dict):
            raise SnapshotLoadError(path.name, "Root must be a dict")

        try:
            return cls.from_dict(data)
        except ValueError as e:
            raise SnapshotLoadError(path.name, str(e))

    @property
    def grails_version(self) -> GrailsVersion:
        return self._snapshot.grails_version

    grails_home = _snapshot_property("grails_home")
    base_dir = _snapshot_property("base_dir")

    script_name = _snapshot_property("script_name")
    env = _snapshot_property("env")
    args = _snapshot_property("args")

    grails_work_dir = _snapshot_property("grails_work_dir")
    project_work_dir = _snapshot_property("project_work_dir")
    classes_dir = _snapshot_property("classes_dir")
    test_classes_dir = _snapshot_property("test_classes_dir")
    resources_dir = _snapshot_property("resources_dir")
    test_reports_dir = _snapshot_property("test_reports_dir")
    project_plugins_dir = _snapshot_property("project_plugins_dir")
    global_plugins_dir = _snapshot_property("global_plugins_dir")

    compile_dependencies = _snapshot_property("compile_dependencies")
    test_dependencies = _snapshot_property("test_dependencies")
    provided_dependencies = _snapshot_property("provided_dependencies")
    runtime_dependencies = _snapshot_property("runtime_dependencies")
    build_dependencies = _snapshot_property("build_dependencies")

    dependencies_externally_configured = _snapshot_property("dependencies_externally_configured")
    plain_output = _snapshot_property("plain_output")


__all__ = [
    "LaunchContextSnapshot",
    "SNAPSHOT_PROPERTIES",
    "SerializableGrailsLaunchContext",
]
