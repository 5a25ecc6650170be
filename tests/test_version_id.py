"""Tests for version identifier formatting, parsing and incrementing."""

from __future__ import annotations

import logging

import pytest

from verledger.version_id import (
    IncrementKind,
    VersionIdentifier,
    format_version,
    increment_version,
    is_legacy_version,
    parse_version,
    to_canonical,
)


def test_format_pads_components() -> None:
    assert format_version(0, 1, 12) == "0.01.012"
    assert format_version(0, 1, 12, 0) == "0.01.012.000"
    assert format_version(3, 10, 250, 7) == "3.10.250.007"


def test_format_does_not_truncate_wide_values() -> None:
    assert format_version(12, 345, 6789, 1000) == "12.345.6789.1000"


@pytest.mark.parametrize("parts", [(0, 0, 0), (1, 2, 3), (4, 99, 999)])
def test_parse_three_part_defaults_build_to_zero(parts: tuple[int, int, int]) -> None:
    assert parse_version(format_version(*parts)) == VersionIdentifier(*parts, 0)


@pytest.mark.parametrize("parts", [(0, 1, 12, 0), (1, 2, 3, 4), (10, 0, 5, 123)])
def test_parse_four_part_recovers_components(parts: tuple[int, int, int, int]) -> None:
    assert parse_version(format_version(*parts)) == VersionIdentifier(*parts)


def test_parse_missing_segments_default_to_zero() -> None:
    assert parse_version("2") == VersionIdentifier(2, 0, 0, 0)
    assert parse_version("") == VersionIdentifier()


def test_parse_non_numeric_segment_is_zero_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="verledger.version_id"):
        parsed = parse_version("1.x.003.zz")
    assert parsed == VersionIdentifier(1, 0, 3, 0)
    assert "Non-numeric segment" in caplog.text


def test_canonical_is_derived_from_components() -> None:
    v = VersionIdentifier(1, 2, 3)
    assert v.canonical == "1.02.003.000"
    assert str(v) == "1.02.003.000"


def test_increment_build_changes_only_build() -> None:
    v = VersionIdentifier(1, 2, 3, 4)
    assert increment_version(v, "build") == VersionIdentifier(1, 2, 3, 5)


def test_increment_update_zeroes_build() -> None:
    v = VersionIdentifier(1, 2, 3, 4)
    assert increment_version(v, IncrementKind.UPDATE) == VersionIdentifier(1, 2, 4, 0)


def test_increment_minor_zeroes_update_and_build() -> None:
    v = VersionIdentifier(1, 2, 3, 4)
    assert increment_version(v, "minor") == VersionIdentifier(1, 3, 0, 0)


def test_increment_major_zeroes_everything_below() -> None:
    v = VersionIdentifier(1, 2, 3, 4)
    nxt = increment_version(v, "major")
    assert nxt == VersionIdentifier(2, 0, 0, 0)
    assert nxt.canonical == "2.00.000.000"


def test_increment_returns_new_value() -> None:
    v = VersionIdentifier(0, 1, 12, 0)
    nxt = v.bump("build")
    assert v.build == 0
    assert nxt.canonical == "0.01.012.001"


def test_increment_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        increment_version(VersionIdentifier(), "patch")


def test_legacy_detection_and_canonical_form() -> None:
    assert is_legacy_version("1.02.003")
    assert not is_legacy_version("1.02.003.000")
    assert to_canonical("1.02.003") == "1.02.003.000"
    assert to_canonical("1.02.003.004") == "1.02.003.004"
