"""Version commands - show and bump the recorded version."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Sequence

from rich.console import Console

from ..config import LedgerSettings
from ..ledger import LedgerWriteError, ReleaseInfo, ReleaseLedger
from ..models import VersionDocument
from ..storage import FileDocumentStore
from ..version_id import IncrementKind


def open_ledger(settings: LedgerSettings) -> ReleaseLedger:
    return ReleaseLedger(FileDocumentStore(settings.version_file))


def run_show(settings: LedgerSettings, *, output_json: bool = False) -> int:
    ledger = open_ledger(settings)
    if output_json:
        print(json.dumps(ledger.current(), indent=2))
        return 0

    console = Console()
    document = ledger.load()
    console.print(f"v{document.version}", highlight=False)
    entry = document.changelog.get(document.version)
    if entry:
        console.print(f"  {entry}", style="dim", highlight=False)
    return 0


def _report(console: Console, before: str, document: VersionDocument) -> None:
    console.print(f"Version updated: {before} -> [bold]{document.version}[/bold]", highlight=False)
    release = document.releases.get(document.version)
    if release is not None:
        console.print(
            f"  Release: {release.title} ({release.release_type}, impact {release.impact_score})",
            highlight=False,
        )


def run_bump(
    settings: LedgerSettings,
    kind: str,
    title: str,
    summary: str,
    changes: Sequence[str],
    *,
    technical: Sequence[str] | None = None,
    consolidate: bool = False,
) -> int:
    """Bump major/minor/update with a release record."""
    console = Console()
    err = Console(stderr=True)
    ledger = open_ledger(settings)
    kind_enum = IncrementKind(kind)
    if kind_enum is IncrementKind.BUILD:
        err.print("Use `verledger build` for build increments.", style="bold red")
        return 2

    changes = list(changes) or ["Feature enhancement"]
    before = ledger.load().version
    try:
        if consolidate:
            document = ledger.update(
                kind_enum,
                f"{title}: {summary}",
                ReleaseInfo(
                    title=title,
                    summary=summary,
                    changes=changes,
                    technical=list(technical) if technical else None,
                    consolidate_with_previous=True,
                ),
            )
        else:
            increment = {
                IncrementKind.MAJOR: ledger.increment_major,
                IncrementKind.MINOR: ledger.increment_minor,
                IncrementKind.UPDATE: ledger.increment_update,
            }[kind_enum]
            document = increment(title, summary, changes, list(technical) if technical else None)
    except LedgerWriteError as e:
        err.print(f"Failed to increment {kind} version: {e}", style="bold red")
        return 1

    _report(console, before, document)
    console.print(f"  Changes: {', '.join(changes)}", highlight=False)
    return 0


def default_build_description(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"Development build - {now.strftime('%H:%M:%S')}"


def run_build(
    settings: LedgerSettings,
    description: str | None = None,
    *,
    only_in_dev: bool = False,
) -> int:
    """Increment the build number, optionally only in the development environment."""
    console = Console()
    err = Console(stderr=True)

    if only_in_dev and not settings.auto_increment_enabled:
        err.print(
            f"Auto-increment disabled (environment: {settings.environment or 'unset'})",
            style="dim",
            highlight=False,
        )
        return 0

    description = description or default_build_description()
    ledger = open_ledger(settings)
    before = ledger.load().version
    try:
        document = ledger.auto_increment_build(description)
    except LedgerWriteError as e:
        err.print(f"Failed to increment build version: {e}", style="bold red")
        return 1

    _report(console, before, document)
    console.print(f"  Description: {description}", highlight=False)
    return 0


def run_changelog(settings: LedgerSettings, entry: str) -> int:
    """Attach a changelog line to the current version."""
    console = Console()
    err = Console(stderr=True)
    ledger = open_ledger(settings)
    try:
        document = ledger.add_changelog_entry(entry)
    except LedgerWriteError as e:
        err.print(f"Failed to record changelog entry: {e}", style="bold red")
        return 1
    console.print(f"Changelog for {document.version}: {entry}", highlight=False)
    return 0
