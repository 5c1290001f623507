"""Rich terminal output for the command line tool."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import Marker, Resolution

console = Console()

_MARKER_STYLES = {
    Marker.EMPTY.value: "dim",
    Marker.QUOTE.value: "yellow",
    Marker.SPLITTER.value: "bold red",
    Marker.FORWARD.value: "magenta",
    Marker.TEXT.value: "green",
}


def display_markers(lines: list[str], markers: str, resolution: Resolution) -> None:
    """Show each line with its marker, dimming the lines that get cut."""
    start, end = resolution.quotation or (len(lines), len(lines))

    table = Table(title="Line Markers")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Marker", justify="center")
    table.add_column("Line")

    for number, (line, marker) in enumerate(zip(lines, markers)):
        style = _MARKER_STYLES.get(marker, "default")
        text = escape(line)
        if start <= number < end:
            text = f"[strike dim]{text}[/strike dim]"
        table.add_row(str(number), f"[{style}]{marker}[/{style}]", text)

    console.print()
    console.print(table)

    if resolution.stripped:
        console.print(
            f"[bold]Quotation:[/bold] lines {start}-{end - 1} "
            f"[dim]({resolution.rule})[/dim]"
        )
    else:
        console.print("[bold]Quotation:[/bold] [dim]none found[/dim]")
    console.print()


def display_reply(reply: str) -> None:
    console.print(escape(reply), highlight=False)
