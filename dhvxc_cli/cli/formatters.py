"""
Functions for formatting and displaying data in the console using Rich.
"""

from typing import Iterable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dhvxc_cli.models.flight import FlightInfo
from dhvxc_cli.models.stats import DownloadStats
from dhvxc_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthenticationError": [
            "• Check your DHV-XC user name and password.",
            "• Make sure you can log in on dhv-xc.de with the same credentials.",
        ],
        "TokenError": [
            "• The DHV-XC login service did not hand out a session token.",
            "• The site may be under maintenance, try again later.",
        ],
        "APIResponseError": [
            "• DHV-XC answered with data this tool does not understand.",
            "• Run the command with -vv (or set XC_DEBUG) to see the raw response.",
        ],
        "ConfigurationError": [
            "• Check the options passed on the command line.",
            "• Run `dhvxc-cli --help` for a list of all options.",
        ],
        "DownloadError": [
            "• Check that the target directory is writable.",
            "• Check the free disk space.",
        ],
        "ClientResponseError": [
            "• The DHV-XC server returned an error status.",
            "• The server might be temporarily unavailable.",
        ],
        "ClientConnectorError": [
            "• Could not connect to the DHV-XC server.",
            "• Check your internet connection.",
        ],
        "TimeoutError": [
            "• A request timed out.",
            "• Check your internet connection or reduce `--workers`.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_flight_table(flights: Iterable[FlightInfo], console: Console | None = None):
    """Displays the flight list as a table."""
    console = console or Console()
    table = Table(title="Recorded Flights", box=box.SIMPLE_HEAD)
    table.add_column("Flight ID", style="cyan", justify="right")
    table.add_column("Date", style="green")
    table.add_column("Takeoff")
    for flight in flights:
        table.add_row(flight.flight_id, flight.date, flight.takeoff)
    console.print(table)


def print_summary_panel(stats: DownloadStats, console: Console | None = None):
    """Displays the final summary of a run."""
    console = console or Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Listed:", f"[bold]{stats.flights_listed}[/bold]")
    if not stats.list_only:
        stats_table.add_row(
            "✓ Saved:", f"[bold green]{stats.flights_saved}[/bold green]"
        )
        stats_table.add_row(
            "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
        )
    stats_table.add_row(
        "Time Elapsed:", f"[blue]{format_duration(stats.elapsed)}[/blue]"
    )

    if stats.list_only:
        title = "🔍 [bold]Flight List[/bold]"
        border_color = "yellow"
    else:
        title = "🪂 [bold]Download Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
