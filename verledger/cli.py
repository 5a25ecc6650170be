"""CLI entrypoint for verledger."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import resolve_settings


@click.group()
@click.version_option(__version__, prog_name="verledger")
@click.option(
    "--file",
    "-f",
    "version_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the version document (defaults to ./version.json)",
)
@click.option("--verbose", is_flag=True, help="Log ledger activity to stderr")
@click.pass_context
def cli(ctx: click.Context, version_file: Path | None, verbose: bool) -> None:
    """verledger - Version and release tracking.

    Maintains a 4-part version (major.minor.update.build), a changelog
    and scored release notes in a single JSON document.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = resolve_settings(version_file=version_file)
    except ValueError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output the full document as JSON")
@click.pass_context
def show(ctx: click.Context, output_json: bool) -> None:
    """Show the current version."""
    from .commands.version_cmd import run_show

    sys.exit(run_show(ctx.obj["settings"], output_json=output_json))


@cli.command()
@click.argument("kind", type=click.Choice(["major", "minor", "update"]))
@click.argument("title")
@click.argument("summary")
@click.argument("changes", nargs=-1)
@click.option("--technical", "-t", multiple=True, help="Technical detail (repeatable)")
@click.option(
    "--consolidate",
    is_flag=True,
    help="Merge into the latest release if it has the same title",
)
@click.pass_context
def bump(
    ctx: click.Context,
    kind: str,
    title: str,
    summary: str,
    changes: tuple[str, ...],
    technical: tuple[str, ...],
    consolidate: bool,
) -> None:
    """Increment the major, minor or update version with a release.

    Examples:

        verledger bump update "Dark mode" "Theme toggle in settings" "Add toggle" "Persist choice"

        verledger bump minor "Accounts" "Email verification" -t "New tokens table"
    """
    from .commands.version_cmd import run_bump

    exit_code = run_bump(
        ctx.obj["settings"],
        kind,
        title,
        summary,
        changes,
        technical=technical,
        consolidate=consolidate,
    )
    sys.exit(exit_code)


@cli.command()
@click.argument("description", required=False)
@click.option(
    "--only-in-dev",
    is_flag=True,
    help="Skip unless VERLEDGER_ENV (or NODE_ENV) matches the auto-increment environment",
)
@click.pass_context
def build(ctx: click.Context, description: str | None, only_in_dev: bool) -> None:
    """Increment the build number."""
    from .commands.version_cmd import run_build

    sys.exit(run_build(ctx.obj["settings"], description, only_in_dev=only_in_dev))


@cli.command()
@click.argument("entry")
@click.pass_context
def changelog(ctx: click.Context, entry: str) -> None:
    """Record a changelog entry for the current version."""
    from .commands.version_cmd import run_changelog

    sys.exit(run_changelog(ctx.obj["settings"], entry))


@cli.command()
@click.option("--limit", type=int, default=None, help="Max releases to show")
@click.option("--include-builds", is_flag=True, help="Include build-only releases")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def releases(ctx: click.Context, limit: int | None, include_builds: bool, output_json: bool) -> None:
    """List recorded releases, newest first."""
    from .commands.releases_cmd import run_releases

    run_releases(ctx.obj["settings"], limit=limit, include_builds=include_builds, output_json=output_json)
    sys.exit(0)


@cli.command()
@click.option("--limit", type=int, default=None, help="Max releases to include")
@click.option("--include-builds", is_flag=True, help="Include build-only releases")
@click.pass_context
def notes(ctx: click.Context, limit: int | None, include_builds: bool) -> None:
    """Print release notes as markdown."""
    from .commands.releases_cmd import run_notes

    sys.exit(run_notes(ctx.obj["settings"], include_builds=include_builds, limit=limit))


@cli.command("summary")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def summary_cmd(ctx: click.Context, output_json: bool) -> None:
    """Summarize releases by type and impact level."""
    from .commands.releases_cmd import run_summary

    sys.exit(run_summary(ctx.obj["settings"], output_json=output_json))


@cli.command()
@click.option(
    "--type",
    "release_type",
    type=click.Choice(["major", "feature", "update", "fix"]),
    required=True,
    help="Release type",
)
@click.option("--title", default="", help="Release title")
@click.option("--summary", "summary_text", default="", help="Release summary")
@click.option("--change", "-c", "changes", multiple=True, help="Change entry (repeatable)")
@click.option("--technical", "-t", multiple=True, help="Technical detail (repeatable)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def score(
    release_type: str,
    title: str,
    summary_text: str,
    changes: tuple[str, ...],
    technical: tuple[str, ...],
    output_json: bool,
) -> None:
    """Compute the impact score of release content without recording it."""
    from .commands.releases_cmd import run_score

    exit_code = run_score(
        release_type,
        title=title,
        summary_text=summary_text,
        changes=changes,
        technical=technical,
        output_json=output_json,
    )
    sys.exit(exit_code)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
