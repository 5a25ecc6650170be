"""Release commands - list, render and score releases."""

from __future__ import annotations

import json
from typing import Sequence

from rich.console import Console
from rich.table import Table

from ..config import LedgerSettings
from ..impact import ImpactTier, classify_impact, compute_impact
from ..notes import effective_score, format_release_notes, sorted_releases, summary
from .version_cmd import open_ledger

_LEVEL_STYLES = {
    ImpactTier.CRITICAL: "bold red",
    ImpactTier.HIGH: "dark_orange",
    ImpactTier.MEDIUM: "yellow",
    ImpactTier.LOW: "blue",
    ImpactTier.MINIMAL: "dim",
}


def run_releases(
    settings: LedgerSettings,
    *,
    limit: int | None = None,
    include_builds: bool = False,
    output_json: bool = False,
) -> int:
    """List releases newest first. Returns the number shown."""
    document = open_ledger(settings).load()
    releases = sorted_releases(document, include_builds=include_builds, limit=limit)

    if output_json:
        print(json.dumps([r.to_dict() for r in releases], indent=2))
        return len(releases)

    console = Console()
    if not releases:
        console.print("[dim]No releases found.[/dim]")
        return 0

    table = Table(title=f"Releases (current v{document.version})")
    table.add_column("version", style="cyan", no_wrap=True)
    table.add_column("date", style="dim")
    table.add_column("type", style="magenta")
    table.add_column("title")
    table.add_column("impact", justify="right")
    table.add_column("level")

    for r in releases:
        score = effective_score(r)
        level = classify_impact(score).level
        ts = r.timestamp
        table.add_row(
            r.version,
            ts.date().isoformat() if ts else "",
            r.release_type,
            r.title,
            str(score),
            f"[{_LEVEL_STYLES[level]}]{level.value}[/]",
        )

    console.print(table)
    return len(releases)


def run_notes(settings: LedgerSettings, *, include_builds: bool = False, limit: int | None = None) -> int:
    document = open_ledger(settings).load()
    print(format_release_notes(document, include_builds=include_builds, limit=limit), end="")
    return 0


def run_summary(settings: LedgerSettings, *, output_json: bool = False) -> int:
    s = summary(open_ledger(settings).load())
    if output_json:
        print(json.dumps(s, indent=2, sort_keys=True))
        return 0

    console = Console()
    console.print(f"[bold]v{s['version']}[/bold]", highlight=False)
    console.print(f"  Releases: {s['total_releases']}")
    if s["total_releases"]:
        console.print(f"  Latest release: {s['latest_release']}", highlight=False)
        console.print(f"  Average impact: {s['average_impact']}")
        for level, count in sorted(s["impact_level_counts"].items(), key=lambda x: -x[1]):
            console.print(f"    {level}: {count}")
    return 0


def run_score(
    release_type: str,
    *,
    title: str = "",
    summary_text: str = "",
    changes: Sequence[str] = (),
    technical: Sequence[str] = (),
    output_json: bool = False,
) -> int:
    """Score release content without touching the ledger."""
    score, reasons = compute_impact(
        release_type=release_type,
        title=title,
        summary=summary_text,
        changes=list(changes),
        technical=list(technical),
    )
    level = classify_impact(score)

    if output_json:
        print(
            json.dumps(
                {
                    "score": score,
                    "level": level.level.value,
                    "description": level.description,
                    "reasons": reasons,
                },
                indent=2,
            )
        )
        return 0

    console = Console()
    console.print(
        f"Impact: [bold]{score}[/bold] [{_LEVEL_STYLES[level.level]}]{level.level.value}[/] - {level.description}",
        highlight=False,
    )
    for reason in reasons:
        console.print(f"  {reason}", style="dim", highlight=False)
    return 0
