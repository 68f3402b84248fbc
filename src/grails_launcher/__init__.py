"""Grails launcher package root.

The public API is the launch context family plus the version, quirk, loader,
configuration and error types needed to build one.
"""

__version__ = "0.1.0"

from grails_launcher.config import LauncherConfig, load_launcher_config  # noqa: F401
from grails_launcher.context import (  # noqa: F401
    DelegatingGrailsLaunchContext,
    GrailsLaunchContext,
    LaunchContextSnapshot,
    SerializableGrailsLaunchContext,
)
from grails_launcher.exceptions import (  # noqa: F401
    ClassNotFoundError,
    ConfigLoadError,
    ContextConstructionError,
    InvocationError,
    LauncherError,
    SnapshotLoadError,
)
from grails_launcher.loader import ClassLoader, MappingClassLoader, ModuleClassLoader  # noqa: F401
from grails_launcher.quirks import Capability, GrailsVersionQuirks  # noqa: F401
from grails_launcher.version import GrailsVersion  # noqa: F401

__all__ = [
    "__version__",
    "Capability",
    "ClassLoader",
    "ClassNotFoundError",
    "ConfigLoadError",
    "ContextConstructionError",
    "DelegatingGrailsLaunchContext",
    "GrailsLaunchContext",
    "GrailsVersion",
    "GrailsVersionQuirks",
    "InvocationError",
    "LaunchContextSnapshot",
    "LauncherConfig",
    "LauncherError",
    "MappingClassLoader",
    "ModuleClassLoader",
    "SerializableGrailsLaunchContext",
    "SnapshotLoadError",
    "load_launcher_config",
]
