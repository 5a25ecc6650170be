"""
Forward migration of persisted version documents.

Documents written before build numbers existed use 3-part version strings
(0.01.012) as the top-level version and as changelog/release keys. Migration
rewrites them to the 4-part form (0.01.012.000).

Migration runs on every load and again before every save, so it must be a
no-op on an already-migrated document.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from .version_id import is_legacy_version, to_canonical

logger = logging.getLogger(__name__)


def _migrate_keys(mapping: dict[str, Any]) -> tuple[dict[str, Any], int]:
    migrated: dict[str, Any] = {}
    rewritten = 0
    for key, value in mapping.items():
        new_key = to_canonical(str(key))
        if new_key != key:
            rewritten += 1
        migrated[new_key] = value
    return migrated, rewritten


def migrate_document(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Return a migrated copy of a raw document. The input is not modified.

    Steps:
    - missing build becomes 0
    - 3-part top-level version gains ".000"
    - 3-part release keys and nested release versions gain ".000"
    - 3-part changelog keys gain ".000"
    """
    doc = copy.deepcopy(raw)
    rewritten = 0

    if doc.get("build") is None:
        doc["build"] = 0

    version = doc.get("version")
    if isinstance(version, str) and is_legacy_version(version):
        doc["version"] = to_canonical(version)
        rewritten += 1

    releases = doc.get("releases")
    if isinstance(releases, dict):
        releases, count = _migrate_keys(releases)
        rewritten += count
        for release in releases.values():
            if isinstance(release, dict) and isinstance(release.get("version"), str):
                release["version"] = to_canonical(release["version"])
        doc["releases"] = releases

    changelog = doc.get("changelog")
    if isinstance(changelog, dict):
        changelog, count = _migrate_keys(changelog)
        rewritten += count
        doc["changelog"] = changelog

    if rewritten:
        logger.info(f"Migrated {rewritten} legacy version string(s) to 4-part form")
    return doc


def needs_migration(raw: dict[str, Any]) -> bool:
    """True if `migrate_document` would change anything."""
    return migrate_document(raw) != raw
