"""
Release notes: read-only views over a version document.

Build-only releases (non-zero build component) are hidden from the default
listing; they are development noise rather than user-facing releases.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .impact import classify_impact, impact_score
from .models import Release, VersionDocument

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def is_build_release(release: Release) -> bool:
    return release.identifier.build != 0


def effective_score(release: Release) -> int:
    """Stored score, or a computed one for releases written without a score."""
    if release.impact_score is not None:
        return release.impact_score
    return impact_score(release)


def sorted_releases(
    document: VersionDocument,
    *,
    include_builds: bool = True,
    limit: int | None = None,
) -> list[Release]:
    """Releases newest first by date."""
    releases = list(document.releases.values())
    if not include_builds:
        releases = [r for r in releases if not is_build_release(r)]
    releases.sort(key=lambda r: r.timestamp or _OLDEST, reverse=True)
    if limit is not None:
        releases = releases[:limit]
    return releases


def summary(document: VersionDocument) -> dict[str, Any]:
    """Statistics about the recorded releases."""
    releases = sorted_releases(document)
    if not releases:
        return {"version": document.version, "total_releases": 0}

    type_counts: dict[str, int] = {}
    level_counts: dict[str, int] = {}
    total_score = 0
    for r in releases:
        type_counts[r.release_type] = type_counts.get(r.release_type, 0) + 1
        score = effective_score(r)
        total_score += score
        level = classify_impact(score).level.value
        level_counts[level] = level_counts.get(level, 0) + 1

    return {
        "version": document.version,
        "total_releases": len(releases),
        "changelog_entries": len(document.changelog),
        "release_type_counts": type_counts,
        "impact_level_counts": level_counts,
        "average_impact": round(total_score / len(releases), 1),
        "latest_release": releases[0].version,
    }


def format_release(release: Release) -> str:
    score = effective_score(release)
    level = classify_impact(score)
    date = release.timestamp
    lines = [
        f"## {release.version} - {release.title}",
        "",
        f"*{release.release_type}* | {date.date().isoformat() if date else 'undated'} | "
        f"impact {score} ({level.level.value})",
        "",
    ]
    if release.summary:
        lines.extend([release.summary, ""])
    if release.changes:
        lines.append("### Changes")
        lines.append("")
        lines.extend(f"- {c}" for c in release.changes)
        lines.append("")
    if release.technical:
        lines.append("### Technical")
        lines.append("")
        lines.extend(f"- {t}" for t in release.technical)
        lines.append("")
    return "\n".join(lines)


def format_release_notes(
    document: VersionDocument,
    *,
    include_builds: bool = False,
    limit: int | None = None,
) -> str:
    """Format releases as markdown, newest first."""
    releases = sorted_releases(document, include_builds=include_builds, limit=limit)
    lines = [f"# Release Notes (v{document.version})", ""]
    if not releases:
        lines.append("No releases recorded.")
        return "\n".join(lines) + "\n"
    for r in releases:
        lines.append(format_release(r))
    return "\n".join(lines).rstrip("\n") + "\n"
