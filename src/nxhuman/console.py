"""Console output and prompts for the nxhuman CLI."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from nxhuman.types import RunStatus, WriteStatus

if TYPE_CHECKING:
    from nxhuman.platforms import Platform
    from nxhuman.types import RunResult, WriteOutcome


class TUI:
    """Text User Interface for the installer."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Rich console to print to (a new one if None).
        """
        self.console = console or Console()

    def show_welcome(self, version: str) -> None:
        """Display welcome banner."""
        self.console.print(
            Panel(
                f"[bold blue]nxHuman[/bold blue] v{version}\n"
                "Minimal AI-assisted development framework",
                title="Welcome",
                border_style="blue",
            )
        )

    def confirm(self, message: str, default: bool = True) -> bool:
        """Show confirmation prompt.

        Args:
            message: Confirmation message.
            default: Default response.

        Returns:
            User's response.
        """
        return Confirm.ask(message, default=default, console=self.console)

    def prompt_platform(self, platforms: list[Platform]) -> str | None:
        """Prompt for the target platform.

        Args:
            platforms: Available platforms, in display order.

        Returns:
            Selected platform id, or None for the minimal variant.
        """
        self.console.print("\nTarget platforms:")
        for platform in platforms:
            self.console.print(f"  [cyan]{platform.name}[/cyan] - {platform.display_name}")
        self.console.print("  [cyan]none[/cyan] - Minimal (no platform guide)")

        choice = Prompt.ask(
            "Select platform",
            choices=[p.name for p in platforms] + ["none"],
            default="none",
            console=self.console,
        )
        return None if choice == "none" else choice

    def show_platforms(self, platforms: list[Platform]) -> None:
        """Display the supported platforms table."""
        table = Table(title="Supported Platforms")
        table.add_column("ID", style="cyan")
        table.add_column("Platform")
        table.add_column("Guide")

        for platform in platforms:
            table.add_row(platform.name, platform.display_name, platform.guide_template)

        self.console.print(table)

    def show_outcome(self, outcome: WriteOutcome) -> None:
        """Show one per-file progress line."""
        name = outcome.path.name
        if outcome.status is WriteStatus.WRITTEN:
            self.show_success(f"Wrote {name}")
        elif outcome.status is WriteStatus.SKIPPED:
            self.console.print(f"[dim]DRY-RUN:[/dim] Would write {name}")
        else:
            self.show_error(f"Failed {name}")

    def show_result(self, result: RunResult, project_root: Path) -> None:
        """Display the run summary.

        Args:
            result: Terminal result of the run.
            project_root: Target directory, used to shorten paths.
        """
        if result.status is RunStatus.CANCELLED:
            self.show_warning("Installation cancelled.")
        elif result.status is RunStatus.BLOCKED:
            self.show_error("Detected existing nxHuman files:")
            self._show_paths(result.conflicts, project_root, style="red")
            self.show_info("Use --force to overwrite or --dry-run to preview.")
        elif result.status is RunStatus.DRY_RUN:
            self._show_preview(result, project_root)
        elif result.status is RunStatus.FAILED:
            message = result.error.message if result.error else "unknown error"
            self.show_error(f"Error: {message}")
            if result.written:
                self.show_warning("These files were written before the failure:")
                self._show_paths(result.written, project_root, style="yellow")
                self.show_info("Fix the cause and re-run with --force.")
            else:
                self.show_info("No files were written.")
        else:
            self.console.print()
            self.show_success("Minimal nxHuman framework installed.")
            if result.migrated is not None:
                self.show_info(f"Merged and removed {_relative(result.migrated, project_root)}")
            self.console.print("\n[bold]Next steps:[/bold]")
            self.console.print("  1. Open in Cursor to read .cursorrules and nxhuman.json")
            self.console.print("  2. Build with AI assistance")

    def _show_preview(self, result: RunResult, project_root: Path) -> None:
        conflicts = set(result.conflicts)
        table = Table(title="Planned Writes")
        table.add_column("File", style="cyan")
        table.add_column("Status")
        for path in result.planned:
            status = "[yellow]overwrite[/yellow]" if path in conflicts else "[green]create[/green]"
            table.add_row(_relative(path, project_root), status)
        self.console.print(table)

        if result.migrated is not None:
            self.show_info(
                f"{_relative(result.migrated, project_root)} would be merged into the new "
                "context file and removed."
            )

        planned = set(result.planned)
        extra = [p for p in result.conflicts if p not in planned]
        if extra:
            self.show_warning("Existing files that would block a normal run:")
            self._show_paths(extra, project_root, style="yellow")
        self.console.print("\n[bold]DRY-RUN COMPLETE:[/bold] No files written.")

    def _show_paths(self, paths: tuple[Path, ...] | list[Path], root: Path, style: str) -> None:
        for path in paths:
            self.console.print(f"  [{style}]{_relative(path, root)}[/{style}]")

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message."""
        self.console.print(f"[blue]i[/blue] {message}")


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
