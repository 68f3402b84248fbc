"""Class loaders that resolve target framework classes by name."""

from __future__ import annotations

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from grails_launcher.exceptions import ClassNotFoundError

logger = logging.getLogger(__name__)


class ClassLoader(ABC):
    """Resolves fully qualified class names to classes."""

    @abstractmethod
    def load_class(self, name: str) -> type:
        """Return the class registered under ``name``.

        Raises:
            ClassNotFoundError: If the name cannot be resolved
        """


class ModuleClassLoader(ClassLoader):
    """Loads classes from importable modules.

    A name like ``grails.util.BuildSettings`` is imported as module
    ``grails.util`` and attribute ``BuildSettings``. ``aliases`` maps logical
    class names onto other import paths, so a framework's canonical names can
    point at Python modules with a different layout.
    """

    def __init__(self, aliases: Optional[Dict[str, str]] = None) -> None:
        self.aliases = dict(aliases or {})

    def load_class(self, name: str) -> type:
        import_path = self.aliases.get(name, name)
        module_path, class_name = self._parse_class_path(name, import_path)

        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ClassNotFoundError(name, f"cannot import module '{module_path}': {e}") from e

        try:
            cls = getattr(module, class_name)
        except AttributeError as e:
            raise ClassNotFoundError(
                name, f"'{class_name}' not found in module '{module_path}'"
            ) from e

        if not isinstance(cls, type):
            raise ClassNotFoundError(name, f"'{import_path}' is not a class")

        logger.debug("Loaded class %s from %s", name, import_path)
        return cls

    @staticmethod
    def _parse_class_path(name: str, import_path: str) -> tuple[str, str]:
        """Split ``module.path.ClassName`` into (module_path, class_name)."""
        parts = import_path.rsplit(".", 1)
        if len(parts) != 2 or not all(parts):
            raise ClassNotFoundError(
                name, f"invalid class path '{import_path}', expected 'module.path.ClassName'"
            )
        return parts[0], parts[1]


class MappingClassLoader(ClassLoader):
    """Loads classes from an explicit name registry.

    Names missing from the registry are delegated to ``parent`` when given.
    """

    def __init__(
        self,
        classes: Optional[Dict[str, type]] = None,
        parent: Optional[ClassLoader] = None,
    ) -> None:
        self.classes: Dict[str, type] = dict(classes or {})
        self.parent = parent

    def register(self, name: str, cls: type) -> None:
        self.classes[name] = cls

    def load_class(self, name: str) -> type:
        cls = self.classes.get(name)
        if cls is not None:
            return cls
        if self.parent is not None:
            return self.parent.load_class(name)
        raise ClassNotFoundError(name)


__all__ = ["ClassLoader", "ModuleClassLoader", "MappingClassLoader"]
