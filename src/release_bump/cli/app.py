"""Typer application for release-bump."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_bump import __version__
from release_bump.cli.commands.bump import run_bump

app = typer.Typer(
    name="release-bump",
    help="Update the changelog and bump the package version with a tagged commit.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Changelog and version bump automation."""


@app.command()
def bump(
    release_kind: str = typer.Argument(
        ...,
        help="major, minor, patch, premajor, preminor, prepatch, prerelease, or a version",
        show_default=False,
    ),
    path: str | None = typer.Option(None, "--path", "-p", help="Project directory"),
    preid: str | None = typer.Option(
        None, "--preid", help="Pre-release identifier, e.g. beta or rc"
    ),
    resume: bool = typer.Option(
        False,
        "--resume",
        help="Bump the version even if the changelog already has this release",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changing anything"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """Bump the package version, update the changelog and make a tag commit."""
    _configure_logging(verbose)
    run_bump(
        release_kind=release_kind,
        path=path,
        preid=preid,
        resume=resume or None,
        dry_run=dry_run,
        console=console,
        err_console=err_console,
    )


def main() -> None:
    app()
