"""
Hierarchical version identifiers.

A version is four non-negative integers: major.minor.update.build.
The canonical text form is always 4 parts, zero padded:

    0.01.012.000

A 3-part form (0.01.012) is accepted only as legacy input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

logger = logging.getLogger(__name__)


class IncrementKind(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    UPDATE = "update"
    BUILD = "build"


def format_version(major: int, minor: int, update: int, build: int | None = None) -> str:
    """Format version components; build is included only when given."""
    text = f"{major}.{minor:02d}.{update:03d}"
    if build is not None:
        text += f".{build:03d}"
    return text


def is_legacy_version(version: str) -> bool:
    """True for the 3-part form written before build numbers existed."""
    return len(version.split(".")) == 3


def to_canonical(version: str) -> str:
    """Append a zero build to a legacy 3-part version string."""
    if is_legacy_version(version):
        return f"{version}.000"
    return version


def _parse_segment(segment: str, version: str) -> int:
    if segment == "":
        return 0
    try:
        return int(segment)
    except ValueError:
        logger.warning(f"Non-numeric segment {segment!r} in version {version!r}; using 0")
        return 0


@dataclass(frozen=True)
class VersionIdentifier:
    """Immutable version value. `canonical` is always derived from the parts."""

    major: int = 0
    minor: int = 0
    update: int = 0
    build: int = 0

    @property
    def canonical(self) -> str:
        return format_version(self.major, self.minor, self.update, self.build)

    def __str__(self) -> str:
        return self.canonical

    def bump(self, kind: IncrementKind | str) -> "VersionIdentifier":
        return increment_version(self, kind)


def parse_version(version: str) -> VersionIdentifier:
    """
    Parse a version string leniently.

    Missing segments default to 0. Non-numeric segments default to 0 with a
    logged warning. Never raises, so corrupt persisted data cannot break reads.
    """
    parts = (version or "").split(".")
    values = [_parse_segment(p.strip(), version) for p in parts[:4]]
    values.extend([0] * (4 - len(values)))
    return VersionIdentifier(*values)


def increment_version(current: VersionIdentifier, kind: IncrementKind | str) -> VersionIdentifier:
    """Return the next version for `kind`; `current` is left untouched."""
    kind = IncrementKind(kind)

    if kind is IncrementKind.MAJOR:
        return VersionIdentifier(major=current.major + 1)
    if kind is IncrementKind.MINOR:
        return VersionIdentifier(major=current.major, minor=current.minor + 1)
    if kind is IncrementKind.UPDATE:
        return VersionIdentifier(major=current.major, minor=current.minor, update=current.update + 1)
    return replace(current, build=current.build + 1)
