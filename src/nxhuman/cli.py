"""CLI commands using Typer."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from nxhuman import __version__
from nxhuman.config import build_request, is_non_interactive, normalize_platform
from nxhuman.console import TUI
from nxhuman.context import create_context
from nxhuman.errors import ConfigurationError
from nxhuman.platforms import Platform, get_platform, get_platform_choices

if TYPE_CHECKING:
    from nxhuman.context import AppContext

app = typer.Typer(
    name="nxhuman",
    help="nxHuman CLI - Minimal AI-Assisted Development Framework",
    no_args_is_help=True,
)

console = Console()
tui = TUI(console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"nxhuman v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """nxHuman CLI - Minimal AI-Assisted Development Framework."""
    pass


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _available_platforms() -> list[Platform]:
    return [get_platform(name) for name in get_platform_choices()]


def _select_platform(platform: str | None, interactive: bool) -> str | None:
    """Validate --platform, prompting for one when interactive and unset.

    Raises:
        typer.Exit: If the platform is not recognized.
    """
    try:
        selected = normalize_platform(platform)
    except ConfigurationError as e:
        tui.show_error(e.message)
        raise typer.Exit(1) from e
    if platform is None and interactive:
        return tui.prompt_platform(_available_platforms())
    return selected


@app.command()
def install(
    target: Annotated[
        Path,
        typer.Argument(
            help="Project directory (defaults to the current directory)",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = Path("."),
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Non-interactive mode")] = False,
    force: Annotated[bool, typer.Option("--force", help="Overwrite existing files")] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show planned writes without modifying files")
    ] = False,
    platform: Annotated[
        str | None,
        typer.Option("--platform", "-p", help="Target platform (see 'nxhuman platforms')"),
    ] = None,
    templates_dir: Annotated[
        Path | None,
        typer.Option("--templates-dir", help="Use templates from this directory", file_okay=False),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Show debug logging")] = False,
    _context=None,
) -> None:
    """Install the nxHuman framework files into a project."""
    _configure_logging(verbose)
    interactive = not is_non_interactive(yes, os.environ, sys.stdout.isatty())
    if interactive:
        tui.show_welcome(__version__)
    selected = _select_platform(platform, interactive)

    try:
        request = build_request(
            target,
            yes=yes,
            force=force,
            dry_run=dry_run,
            platform=selected,
            environ=os.environ,
            stdout_is_tty=sys.stdout.isatty(),
        )
    except ConfigurationError as e:
        tui.show_error(e.message)
        raise typer.Exit(1) from e

    ctx: AppContext = _context or create_context(templates_dir)

    confirmed = True
    if not request.non_interactive:
        confirmed = tui.confirm("Install minimal nxHuman AI framework?")

    result = ctx.installer.run(request, confirmed=confirmed, on_outcome=tui.show_outcome)
    tui.show_result(result, request.project_root)
    if result.exit_code:
        raise typer.Exit(result.exit_code)


@app.command("platforms")
def platforms() -> None:
    """List supported platforms."""
    tui.show_platforms(_available_platforms())


if __name__ == "__main__":
    app()
