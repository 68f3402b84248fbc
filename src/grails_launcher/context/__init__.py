"""Launch context implementations."""

from .base import GrailsLaunchContext
from .delegating import DelegatingGrailsLaunchContext, is_interactive_args
from .serializable import LaunchContextSnapshot, SerializableGrailsLaunchContext

__all__ = [
    "DelegatingGrailsLaunchContext",
    "GrailsLaunchContext",
    "LaunchContextSnapshot",
    "SerializableGrailsLaunchContext",
    "is_interactive_args",
]
