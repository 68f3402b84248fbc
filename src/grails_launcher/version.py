"""
Grails version descriptor.

Versions are compared on their numeric (major, minor, patch) parts only; a
release qualifier such as ``RC1`` or ``SNAPSHOT`` is kept for display.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Optional, Tuple

_VERSION_PATTERN = re.compile(
    r"^\s*(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?(?:[.\-](?P<tag>[A-Za-z0-9.\-]+))?\s*$"
)


@total_ordering
@dataclass(frozen=True)
class GrailsVersion:
    """Immutable, ordered identifier of a Grails release."""

    major: int
    minor: int = 0
    patch: int = 0
    tag: Optional[str] = field(default=None, compare=False)

    @classmethod
    def parse(cls, version_str: str) -> "GrailsVersion":
        """Parse a version string like ``2.1.0`` or ``2.0.0.RC1``.

        Args:
            version_str: Dotted version string.

        Returns:
            Parsed GrailsVersion.

        Raises:
            ValueError: If the string is not a version.
        """
        if not version_str or not isinstance(version_str, str):
            raise ValueError(f"Invalid Grails version: {version_str!r}")

        match = _VERSION_PATTERN.match(version_str)
        if match is None:
            raise ValueError(f"Invalid Grails version: {version_str!r}")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            tag=match.group("tag"),
        )

    @property
    def numbers(self) -> Tuple[int, int, int]:
        return self.major, self.minor, self.patch

    def is_(self, major: int, minor: Optional[int] = None) -> bool:
        """Return True if this is a ``major`` (or ``major.minor``) release."""
        if self.major != major:
            return False
        return minor is None or self.minor == minor

    def at_least(self, major: int, minor: int = 0, patch: int = 0) -> bool:
        return self.numbers >= (major, minor, patch)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GrailsVersion):
            return NotImplemented
        return self.numbers < other.numbers

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.tag:
            text += f".{self.tag}"
        return text


__all__ = ["GrailsVersion"]
