"""Data models for the persisted version document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .version_id import IncrementKind, VersionIdentifier, parse_version

logger = logging.getLogger(__name__)


DEFAULT_VERSION = VersionIdentifier(major=0, minor=1, update=12, build=0)
DEFAULT_CHANGELOG_ENTRY = (
    "Implemented comprehensive version impact scoring to highlight key improvements and system changes"
)


class ReleaseType(str, Enum):
    MAJOR = "major"
    FEATURE = "feature"
    UPDATE = "update"
    FIX = "fix"


# Release labels are not the increment kinds: minor bumps ship "feature"
# releases and build bumps ship "fix" releases.
RELEASE_TYPE_FOR_KIND: dict[IncrementKind, ReleaseType] = {
    IncrementKind.MAJOR: ReleaseType.MAJOR,
    IncrementKind.MINOR: ReleaseType.FEATURE,
    IncrementKind.UPDATE: ReleaseType.UPDATE,
    IncrementKind.BUILD: ReleaseType.FIX,
}


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 in UTC with milliseconds and a Z suffix (2025-08-17T01:04:00.000Z)."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime | None:
    """Parse a stored release date; naive values are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        ts = datetime.fromisoformat(text)
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Release:
    """A release note attached to one version key."""

    version: str
    date: str
    title: str
    release_type: str  # major, feature, update, fix
    summary: str
    changes: list[str] = field(default_factory=list)
    technical: list[str] | None = None
    impact_score: int | None = None

    @property
    def timestamp(self) -> datetime | None:
        return parse_timestamp(self.date)

    @property
    def identifier(self) -> VersionIdentifier:
        return parse_version(self.version)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "date": self.date,
            "title": self.title,
            "type": self.release_type,
            "summary": self.summary,
            "changes": list(self.changes),
        }
        if self.technical is not None:
            data["technical"] = list(self.technical)
        if self.impact_score is not None:
            data["impactScore"] = self.impact_score
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Release":
        technical = data.get("technical")
        score = data.get("impactScore")
        return cls(
            version=str(data.get("version", "")),
            date=str(data.get("date", "")),
            title=str(data.get("title", "")),
            release_type=str(data.get("type", "")),
            summary=str(data.get("summary", "")),
            changes=_str_list(data.get("changes")),
            technical=_str_list(technical) if technical is not None else None,
            impact_score=_int_or(score, 0) if score is not None else None,
        )


@dataclass
class VersionDocument:
    """
    The ledger's durable state.

    The textual version is derived from `identifier`, so the string and the
    numeric components cannot drift apart.
    """

    identifier: VersionIdentifier
    changelog: dict[str, str] = field(default_factory=dict)
    releases: dict[str, Release] = field(default_factory=dict)

    @property
    def version(self) -> str:
        return self.identifier.canonical

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "major": self.identifier.major,
            "minor": self.identifier.minor,
            "update": self.identifier.update,
            "build": self.identifier.build,
            "changelog": dict(self.changelog),
            "releases": {key: r.to_dict() for key, r in self.releases.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VersionDocument":
        """Build from an already-migrated raw document."""
        parsed = parse_version(str(data.get("version", "")))
        identifier = VersionIdentifier(
            major=_int_or(data.get("major"), parsed.major),
            minor=_int_or(data.get("minor"), parsed.minor),
            update=_int_or(data.get("update"), parsed.update),
            build=_int_or(data.get("build"), parsed.build),
        )
        if data.get("version") and identifier.canonical != parsed.canonical:
            logger.warning(
                f"Version string {data.get('version')!r} disagrees with components; "
                f"using {identifier.canonical}"
            )

        changelog_raw = data.get("changelog")
        changelog = (
            {str(k): str(v) for k, v in changelog_raw.items()} if isinstance(changelog_raw, dict) else {}
        )

        releases_raw = data.get("releases")
        releases: dict[str, Release] = {}
        if isinstance(releases_raw, dict):
            for key, value in releases_raw.items():
                if isinstance(value, dict):
                    releases[str(key)] = Release.from_dict(value)
                else:
                    logger.warning(f"Skipping malformed release entry {key!r}")

        return cls(identifier=identifier, changelog=changelog, releases=releases)


def default_document() -> VersionDocument:
    """A fresh fallback document; never shared between calls."""
    return VersionDocument(
        identifier=DEFAULT_VERSION,
        changelog={DEFAULT_VERSION.canonical: DEFAULT_CHANGELOG_ENTRY},
        releases={},
    )
