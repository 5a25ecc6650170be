"""Tests for impact scoring and classification."""

from __future__ import annotations

import pytest

from verledger.impact import (
    HIGH_IMPACT_KEYWORDS,
    MAX_SCORE,
    ImpactTier,
    classify_impact,
    compute_impact,
    impact_score,
)
from verledger.models import Release


def _release(**overrides) -> Release:
    data = {
        "version": "0.01.013.000",
        "date": "2025-08-17T01:04:00.000Z",
        "title": "Add OAuth",
        "release_type": "feature",
        "summary": "Improve security",
        "changes": ["a", "b"],
        "technical": ["t1"],
    }
    data.update(overrides)
    return Release(**data)


def test_documented_example_scores_93_medium() -> None:
    score = impact_score(_release())
    assert score == 93
    assert classify_impact(score).level is ImpactTier.MEDIUM


@pytest.mark.parametrize(
    ("release_type", "base"),
    [("major", 100), ("feature", 70), ("update", 40), ("fix", 20), ("hotfix", 0)],
)
def test_base_points_by_type(release_type: str, base: int) -> None:
    score, _ = compute_impact(release_type=release_type)
    assert score == base


def test_changes_and_technical_add_points() -> None:
    score, _ = compute_impact(release_type="fix", changes=["x", "y", "z"], technical=["q", "r"])
    assert score == 20 + 15 + 6


def test_missing_technical_counts_zero() -> None:
    assert impact_score(_release(title="t", summary="s", technical=None)) == 70 + 10


def test_keyword_matches_substrings() -> None:
    # "api" inside "rapid" is a known over-match.
    score, reasons = compute_impact(release_type="fix", title="rapid")
    assert score == 30
    assert any("'api'" in r for r in reasons)


def test_keyword_counted_once_and_case_insensitive() -> None:
    score, _ = compute_impact(release_type="fix", title="SECURITY", summary="security security")
    assert score == 30


def test_score_is_capped() -> None:
    text = " ".join(HIGH_IMPACT_KEYWORDS)
    score, reasons = compute_impact(release_type="major", title=text, changes=["c"] * 20)
    assert score == MAX_SCORE
    assert reasons[-1] == f"capped at {MAX_SCORE}"


def test_score_monotonic_in_changes_and_technical() -> None:
    previous = -1
    for n in range(0, 40):
        score = impact_score(_release(title="t", summary="s", changes=["c"] * n, technical=["t"] * n))
        assert score >= previous
        assert score <= MAX_SCORE
        previous = score


def test_empty_inputs_are_valid() -> None:
    assert impact_score(_release(title="", summary="", changes=[], technical=[])) == 70


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (200, ImpactTier.CRITICAL),
        (150, ImpactTier.CRITICAL),
        (149, ImpactTier.HIGH),
        (100, ImpactTier.HIGH),
        (99, ImpactTier.MEDIUM),
        (60, ImpactTier.MEDIUM),
        (59, ImpactTier.LOW),
        (30, ImpactTier.LOW),
        (29, ImpactTier.MINIMAL),
        (0, ImpactTier.MINIMAL),
    ],
)
def test_classify_boundaries_belong_to_higher_tier(score: int, tier: ImpactTier) -> None:
    assert classify_impact(score).level is tier


def test_classify_descriptions() -> None:
    assert classify_impact(150).description == "Major system changes with significant impact"
    assert classify_impact(0).description == "Small maintenance updates"
