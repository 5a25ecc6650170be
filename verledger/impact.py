"""
Impact scoring for releases.

The score is a bounded heuristic computed from release content, never taken
from user input. Keyword matching is plain substring search: "api" also
matches inside "rapid". That over-match is accepted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import Release


MAX_SCORE = 200

TYPE_SCORES: dict[str, int] = {
    "major": 100,
    "feature": 70,
    "update": 40,
    "fix": 20,
}

CHANGE_POINTS = 5
TECHNICAL_POINTS = 3
KEYWORD_POINTS = 10

HIGH_IMPACT_KEYWORDS: tuple[str, ...] = (
    "security",
    "performance",
    "authentication",
    "database",
    "api",
    "integration",
    "ui",
    "ux",
    "accessibility",
    "optimization",
    "architecture",
    "framework",
    "migration",
    "breaking",
)


class ImpactTier(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    MINIMAL = "Minimal"


@dataclass(frozen=True)
class ImpactLevel:
    level: ImpactTier
    description: str


# Ordered highest first; lower bounds are inclusive.
_TIERS: tuple[tuple[int, ImpactTier, str], ...] = (
    (150, ImpactTier.CRITICAL, "Major system changes with significant impact"),
    (100, ImpactTier.HIGH, "Important updates affecting core functionality"),
    (60, ImpactTier.MEDIUM, "Notable improvements and enhancements"),
    (30, ImpactTier.LOW, "Minor fixes and small improvements"),
)


def compute_impact(
    *,
    release_type: str,
    title: str = "",
    summary: str = "",
    changes: Sequence[str] = (),
    technical: Sequence[str] | None = None,
) -> tuple[int, list[str]]:
    """
    Compute the impact score and a short explanation list.

    Unknown release types contribute 0 base points rather than failing.
    """
    technical = technical or ()
    reasons: list[str] = []

    base = TYPE_SCORES.get(release_type, 0)
    score = base
    reasons.append(f"type {release_type!r}: +{base}")

    if changes:
        score += len(changes) * CHANGE_POINTS
        reasons.append(f"{len(changes)} change(s): +{len(changes) * CHANGE_POINTS}")

    if technical:
        score += len(technical) * TECHNICAL_POINTS
        reasons.append(f"{len(technical)} technical detail(s): +{len(technical) * TECHNICAL_POINTS}")

    text = " ".join([title, summary, " ".join(changes), " ".join(technical)]).lower()
    for keyword in HIGH_IMPACT_KEYWORDS:
        if keyword in text:
            score += KEYWORD_POINTS
            reasons.append(f"keyword {keyword!r}: +{KEYWORD_POINTS}")

    if score > MAX_SCORE:
        reasons.append(f"capped at {MAX_SCORE}")
    return (max(0, min(score, MAX_SCORE)), reasons)


def impact_score(release: "Release") -> int:
    """Score a release (only its descriptive fields are read)."""
    score, _ = compute_impact(
        release_type=release.release_type,
        title=release.title,
        summary=release.summary,
        changes=release.changes,
        technical=release.technical,
    )
    return score


def classify_impact(score: int) -> ImpactLevel:
    for threshold, tier, description in _TIERS:
        if score >= threshold:
            return ImpactLevel(tier, description)
    return ImpactLevel(ImpactTier.MINIMAL, "Small maintenance updates")
