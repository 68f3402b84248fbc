"""
Custom exception classes for the Grails launcher.

This module defines structured exception types for configuration loading,
class resolution, dynamic invocation and launch context construction.
"""

from typing import Any, Optional


class LauncherError(Exception):
    """Base exception for all launcher errors."""
    pass


class ClassNotFoundError(LauncherError):
    """A class loader could not resolve a class name."""

    def __init__(self, class_name: str, message: Optional[str] = None):
        self.class_name = class_name
        self.message = message
        if message:
            super().__init__(f"Class not found: {class_name} ({message})")
        else:
            super().__init__(f"Class not found: {class_name}")


class InvocationError(LauncherError):
    """A dynamic call against an opaque target failed.

    Raised for every failure mode alike: the operation is missing, the
    arguments do not match, or the target itself raised. The original
    exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, target: Any, operation: str, cause: BaseException):
        self.target = target
        self.operation = operation
        self.cause = cause
        target_name = target.__name__ if isinstance(target, type) else type(target).__name__
        super().__init__(
            f"Invocation of {target_name}.{operation} failed: "
            f"{type(cause).__name__}: {cause}"
        )


class ContextConstructionError(LauncherError):
    """The build settings object could not be loaded, created or bound."""

    def __init__(self, class_name: str, cause: BaseException):
        self.class_name = class_name
        self.cause = cause
        super().__init__(
            f"Could not create launch context from {class_name}: "
            f"{type(cause).__name__}: {cause}"
        )


class ConfigLoadError(LauncherError):
    """Error loading the launcher configuration file."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        self.message = message
        super().__init__(f"Error loading {file_name}: {message}")


class SnapshotLoadError(LauncherError):
    """Error loading a serialized launch context."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        self.message = message
        super().__init__(f"Error loading launch context {file_name}: {message}")
