"""Capability flags that differ between Grails versions."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet

from grails_launcher.version import GrailsVersion


class Capability(str, Enum):
    PROVIDED_DEPENDENCIES = "supports-provided-dependencies"
    BUILD_DEPENDENCIES = "supports-build-dependencies"


# First release that has each capability. Anything newer keeps it.
CAPABILITY_SINCE = {
    Capability.PROVIDED_DEPENDENCIES: GrailsVersion(1, 2),
    Capability.BUILD_DEPENDENCIES: GrailsVersion(2, 0),
}


class GrailsVersionQuirks:
    """Capabilities of one Grails version, computed once at construction."""

    __slots__ = ("_grails_version", "_capabilities")

    def __init__(self, grails_version: GrailsVersion) -> None:
        self._grails_version = grails_version
        self._capabilities: FrozenSet[Capability] = frozenset(
            capability
            for capability, since in CAPABILITY_SINCE.items()
            if grails_version.at_least(*since.numbers)
        )

    @property
    def grails_version(self) -> GrailsVersion:
        return self._grails_version

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return self._capabilities

    def supports(self, capability: Capability) -> bool:
        return capability in self._capabilities

    @property
    def supports_provided_dependencies(self) -> bool:
        return self.supports(Capability.PROVIDED_DEPENDENCIES)

    @property
    def supports_build_dependencies(self) -> bool:
        return self.supports(Capability.BUILD_DEPENDENCIES)

    def __repr__(self) -> str:
        flags = ", ".join(sorted(c.value for c in self._capabilities))
        return f"GrailsVersionQuirks({self._grails_version}: {flags or 'none'})"


__all__ = ["Capability", "CAPABILITY_SINCE", "GrailsVersionQuirks"]
