"""Output formatting utilities"""

from typing import Callable, Iterable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...api.exceptions import FlavorError
from ...constants import EMOJI_ARROW, EMOJI_ERROR, EMOJI_SUCCESS
from ...models import Flavor, InstallResult

console = Console()


def progress_printer(target: Console = console) -> Callable[[str], None]:
    """Build a progress callback printing each message on its own line"""
    def report(message: str) -> None:
        target.print(escape(message), highlight=False)

    return report


def format_install_result(result: InstallResult) -> None:
    """Format and display install or upgrade result"""
    title = "Install Result" if result.mode.value == "install" else "Upgrade Result"
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] {len(result.flavors)} flavor(s) deployed",
        "",
        f"[bold]Vimfiles:[/bold] {result.vimfiles_path}",
        f"[bold]Lock file:[/bold] {result.lockfile_path}",
    ]

    if result.bootstrap_path:
        lines.append(f"[bold]Bootstrap:[/bold] {result.bootstrap_path}")

    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.2f}s")

    changed = result.changed_flavors
    if changed:
        lines.append("")
        lines.append("[bold]Changed:[/bold]")
        for flavor in changed:
            previous = flavor.previous_version or "new"
            lines.append(
                f"  • {escape(flavor.source_name)} {previous} {EMOJI_ARROW} {flavor.version}"
            )

    panel = Panel(
        "\n".join(lines),
        title=title,
        border_style="green"
    )
    console.print(panel)


def format_flavor_list(flavors: Iterable[Flavor], title: str = "Locked Flavors") -> None:
    """Format and display locked flavors"""
    flavors = list(flavors)
    if not flavors:
        console.print("[yellow]No flavors locked[/yellow]")
        return

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Constraint")
    table.add_column("Groups", style="dim")

    for flavor in flavors:
        table.add_row(
            escape(flavor.source_name),
            str(flavor.locked_version) if flavor.locked_version else "-",
            str(flavor.constraint),
            ", ".join(flavor.groups)
        )

    console.print(table)


def print_flavor_error(error: FlavorError) -> None:
    """Display a failed operation with the flavor and step involved"""
    lines = [f"[red]{EMOJI_ERROR} {escape(str(error))}[/red]"]

    if error.source_name:
        lines.append(f"[bold]Flavor:[/bold] {escape(error.source_name)}")
    if error.step:
        lines.append(f"[bold]Step:[/bold] {error.step}")
    if error.error_code:
        lines.append(f"[bold]Code:[/bold] {error.error_code}")
    if error.output:
        lines.append("")
        lines.append("[bold]Output:[/bold]")
        lines.append(f"[dim]{escape(error.output.rstrip())}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title="Error",
        border_style="red"
    )
    console.print(panel)
