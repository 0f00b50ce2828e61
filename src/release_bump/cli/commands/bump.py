"""Implementation of the 'bump' command.

The bump command updates the changelog, commits it, and bumps the
package version with a tagged commit.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from release_bump.config import load_config
from release_bump.core.release import ReleaseOrchestrator
from release_bump.exceptions import CommandError, InvalidReleaseKindError, ReleaseBumpError
from release_bump.project import load_package_metadata
from release_bump.vcs import SubprocessExecutor

if TYPE_CHECKING:
    from rich.console import Console

    from release_bump.core.release import ReleaseOutcome


def run_bump(
    release_kind: str,
    path: str | None,
    preid: str | None,
    resume: bool | None,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Args:
        release_kind: Release kind (major, minor, patch, pre*) or version
        path: Optional path to project directory
        preid: Pre-release identifier (e.g. "beta", "rc")
        resume: Bump even if the changelog already has the version
            (None uses the configured default)
        dry_run: Preview the changelog section without changing anything
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        metadata = load_package_metadata(project_path)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error loading project:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    orchestrator = ReleaseOrchestrator(
        executor=SubprocessExecutor(project_path),
        metadata=metadata,
        config=config,
        project_path=project_path,
    )

    try:
        outcome = orchestrator.run(release_kind, preid=preid, resume=resume, dry_run=dry_run)
    except InvalidReleaseKindError as e:
        err_console.print(f"[red]{escape(str(e))}[/]")
        raise SystemExit(1) from e
    except CommandError as e:
        err_console.print(f"[red]Command failed:[/] {escape(' '.join(e.command))}")
        if e.output:
            err_console.print(e.output.rstrip(), style="red", markup=False)
        err_console.print(f"[dim]Release aborted after step: {orchestrator.aborted_after}[/]")
        raise SystemExit(1) from e
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    _report(outcome, config.changelog.path, console)


def _report(outcome: ReleaseOutcome, changelog_path: Path, console: Console) -> None:
    if outcome.dry_run:
        section = escape(outcome.section.render()) if outcome.section else ""
        status = (
            "[yellow]already present[/]" if not outcome.changelog_applied else "[green]new[/]"
        )
        console.print(
            Panel(
                f"[bold]{outcome.current_version} -> {outcome.next_version}[/] "
                f"(changelog section {status})\n\n{section}",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        return

    if outcome.already_released and not outcome.bumped:
        console.print(
            f"[yellow]{changelog_path} already has a section for {outcome.next_version}. "
            "Nothing to do.[/]\n"
            "[dim]Use [cyan]--resume[/] to bump the version anyway.[/]"
        )
        return

    console.print(
        Panel(
            f"[green]Released version {outcome.next_version}![/]\n\n"
            f"{escape(outcome.bump_output.strip())}\n\n"
            "Next step: [cyan]git push --follow-tags[/]",
            title="[green]Bump Complete[/]",
            border_style="green",
        )
    )
