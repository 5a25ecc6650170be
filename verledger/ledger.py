"""
Release ledger: the read-modify-write cycle over the version document.

Each operation loads (and migrates) the persisted document, applies one
change, migrates again and writes the whole document back.

Read failures fall back to the default document. Write failures raise
LedgerWriteError: a version bump that was not persisted must not look
like it succeeded.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from .impact import impact_score
from .migration import migrate_document
from .models import (
    RELEASE_TYPE_FOR_KIND,
    Release,
    VersionDocument,
    default_document,
    format_timestamp,
)
from .storage import DocumentStore
from .version_id import IncrementKind, increment_version

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class LedgerWriteError(RuntimeError):
    """The store rejected a write; the in-memory change was not persisted."""


@dataclass
class ReleaseInfo:
    """Release metadata attached to a version bump."""

    title: str
    summary: str
    changes: list[str] = field(default_factory=list)
    technical: list[str] | None = None
    consolidate_with_previous: bool = False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _append_unique(target: list[str], additions: Sequence[str]) -> None:
    seen = set(target)
    for item in additions:
        if item not in seen:
            target.append(item)
            seen.add(item)


class ReleaseLedger:
    """Version and release bookkeeping over a single persisted document.

    Not safe across processes: concurrent writers race and the last one wins.
    Within a process, operations on one ledger are serialized.
    """

    def __init__(self, store: DocumentStore, *, clock: Callable[[], datetime] | None = None):
        self.store = store
        self.clock = clock or _utc_now
        self._lock = threading.Lock()

    # --- Persistence ---

    def load(self) -> VersionDocument:
        """Read and migrate the stored document, or return the default one."""
        try:
            data = self.store.read()
        except Exception as e:
            logger.warning(f"Error reading version document from {self.store!r}: {e}")
            return default_document()

        if data is None:
            return default_document()

        try:
            raw = json.loads(data.decode("utf-8"))
        except (ValueError, RecursionError) as e:
            logger.warning(f"Corrupt version document in {self.store!r}: {e}")
            return default_document()

        if not isinstance(raw, dict):
            logger.warning(f"Version document in {self.store!r} is not an object; using default")
            return default_document()

        return VersionDocument.from_dict(migrate_document(raw))

    def _save(self, document: VersionDocument) -> VersionDocument:
        migrated = migrate_document(document.to_dict())
        payload = (json.dumps(migrated, indent=2) + "\n").encode("utf-8")
        try:
            self.store.write(payload)
        except OSError as e:
            raise LedgerWriteError(f"Failed to write version document to {self.store!r}: {e}") from e
        return VersionDocument.from_dict(migrated)

    # --- Queries ---

    def current(self) -> dict[str, Any]:
        """The {version, changelog, releases} view served to presentation layers."""
        data = self.load().to_dict()
        return {
            "version": data["version"],
            "changelog": data["changelog"],
            "releases": data["releases"],
        }

    # --- Updates ---

    def update(
        self,
        kind: IncrementKind | str,
        changelog_entry: str,
        release_info: ReleaseInfo | None = None,
    ) -> VersionDocument:
        """Bump the version, record the changelog line and optional release, persist."""
        kind = IncrementKind(kind)
        with self._lock:
            document = self.load()
            previous = document.version
            document.identifier = increment_version(document.identifier, kind)
            version = document.version

            document.changelog[version] = changelog_entry

            if release_info is not None:
                consolidated = False
                if release_info.consolidate_with_previous and document.releases:
                    consolidated = self._consolidate(document, release_info)
                if not consolidated:
                    self._create_release(document, release_info, kind)

            saved = self._save(document)

        logger.info(f"Version updated from {previous} to {version}")
        logger.info(f"Changelog: {changelog_entry}")
        return saved

    def _latest_release_key(self, document: VersionDocument) -> str:
        def sort_key(key: str) -> datetime:
            ts = document.releases[key].timestamp
            if ts is None:
                logger.warning(f"Unparseable date on release {key!r}; treating as oldest")
                return _OLDEST
            return ts

        # max() keeps the first of equal dates, i.e. insertion order breaks ties.
        return max(document.releases, key=sort_key)

    def _consolidate(self, document: VersionDocument, info: ReleaseInfo) -> bool:
        latest_key = self._latest_release_key(document)
        latest = document.releases[latest_key]
        if latest.title != info.title:
            return False

        version = document.version
        latest.version = version
        latest.date = format_timestamp(self.clock())
        latest.summary = info.summary
        _append_unique(latest.changes, info.changes)
        if info.technical is not None:
            if latest.technical is None:
                latest.technical = []
            _append_unique(latest.technical, info.technical)
        latest.impact_score = impact_score(latest)

        if latest_key != version:
            del document.releases[latest_key]
            document.releases[version] = latest

        logger.info(f"Consolidated release {version} with previous release {latest_key}")
        return True

    def _create_release(self, document: VersionDocument, info: ReleaseInfo, kind: IncrementKind) -> Release:
        release = Release(
            version=document.version,
            date=format_timestamp(self.clock()),
            title=info.title,
            release_type=RELEASE_TYPE_FOR_KIND[kind].value,
            summary=info.summary,
            changes=list(info.changes),
            technical=list(info.technical) if info.technical is not None else None,
        )
        release.impact_score = impact_score(release)
        document.releases[release.version] = release
        return release

    def add_changelog_entry(self, entry: str) -> VersionDocument:
        """Record a changelog line for the current version without bumping."""
        with self._lock:
            document = self.load()
            document.changelog[document.version] = entry
            return self._save(document)

    def add_release(self, release: Release) -> VersionDocument:
        """Insert a fully formed release at its own version key. The score is trusted."""
        with self._lock:
            document = self.load()
            document.releases[release.version] = release
            return self._save(document)

    # --- Named increments ---

    def auto_increment_build(self, description: str) -> VersionDocument:
        logger.info("Auto-incrementing build number...")
        return self.update(
            IncrementKind.BUILD,
            description,
            ReleaseInfo(
                title=f"Build Update - {description}",
                summary=f"Automated build increment: {description}",
                changes=[description],
                technical=["Build number auto-incremented during development"],
            ),
        )

    def _increment_named(
        self,
        kind: IncrementKind,
        title: str,
        summary: str,
        changes: Sequence[str],
        technical: Sequence[str] | None,
    ) -> VersionDocument:
        return self.update(
            kind,
            f"{title}: {summary}",
            ReleaseInfo(
                title=title,
                summary=summary,
                changes=list(changes),
                technical=list(technical) if technical is not None else None,
            ),
        )

    def increment_update(
        self, title: str, summary: str, changes: Sequence[str], technical: Sequence[str] | None = None
    ) -> VersionDocument:
        """New features or enhancements."""
        logger.info("Incrementing update version...")
        return self._increment_named(IncrementKind.UPDATE, title, summary, changes, technical)

    def increment_minor(
        self, title: str, summary: str, changes: Sequence[str], technical: Sequence[str] | None = None
    ) -> VersionDocument:
        logger.info("Incrementing minor version...")
        return self._increment_named(IncrementKind.MINOR, title, summary, changes, technical)

    def increment_major(
        self, title: str, summary: str, changes: Sequence[str], technical: Sequence[str] | None = None
    ) -> VersionDocument:
        logger.info("Incrementing major version...")
        return self._increment_named(IncrementKind.MAJOR, title, summary, changes, technical)
