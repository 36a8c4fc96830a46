"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiohttp
import typer
from rich.console import Console
from rich.logging import RichHandler

from dhvxc_cli import __version__
from dhvxc_cli.api.client import DhvXcAPIClient
from dhvxc_cli.core.download_manager import DownloadManager
from dhvxc_cli.exceptions import DhvXcError, DownloadError
from dhvxc_cli.models.config import (
    DEFAULT_API_URL,
    DEFAULT_IGC_URL,
    SessionConfig,
    load_config,
)
from dhvxc_cli.utils.path import create_dir

from .formatters import (
    format_error_with_suggestions,
    print_flight_table,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("dhvxc_cli")

# Presence of this variable switches on debug logging
DEBUG_ENV_VAR = "XC_DEBUG"

app = typer.Typer(
    name="dhvxc-cli",
    help="Download your recorded flights from DHV-XC as IGC files.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def configure_logging(verbose: int) -> None:
    log_level = "INFO"
    if verbose >= 2 or DEBUG_ENV_VAR in os.environ:
        log_level = "DEBUG"
    logging.getLogger("dhvxc_cli").setLevel(log_level)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]dhvxc-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


async def run_session(config: SessionConfig) -> DownloadManager:
    """
    Logs in and runs the download manager for one configuration.

    The API session is closed on the way out, also when a step fails.
    """
    async with DhvXcAPIClient(
        config.api_url, config.igc_url, config.max_workers
    ) as api_client:
        await api_client.authenticator.authenticate(config.credentials)
        manager = DownloadManager(config, api_client)
        await manager.execute_downloads()
    return manager


@app.command()
def main(
    user: str = typer.Option(
        ..., "-u", "--user", envvar="DHVXC_USER", help="DHV-XC user name."
    ),
    password: str = typer.Option(
        ...,
        "-p",
        "--pass",
        envvar="DHVXC_PASS",
        help="DHV-XC user password.",
    ),
    target_dir: Path = typer.Option(
        ..., "-d", "--dir", envvar="DHVXC_DIR", help="Target directory."
    ),
    list_only: bool = typer.Option(
        False, "-l", "--list", help="List flights only, do not download."
    ),
    flight_id: int = typer.Option(
        0, "-i", "--id", help="Download the flight with this ID only."
    ),
    workers: int = typer.Option(
        8, "-w", "--workers", help="Number of simultaneous connections."
    ),
    api_url: str = typer.Option(
        DEFAULT_API_URL, "--api-url", envvar="DHVXC_API_URL", help="API base URL."
    ),
    igc_url: str = typer.Option(
        DEFAULT_IGC_URL,
        "--igc-url",
        envvar="DHVXC_IGC_URL",
        help="Track log URL template, must contain {flight_id}.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_version_callback,
    ),
):
    """Log in to DHV-XC and save your flights to <dir>/<date>/<id>.igc."""
    configure_logging(verbose)

    try:
        config = load_config(
            {
                "user": user,
                "password": password,
                "target_dir": target_dir,
                "list_only": list_only,
                "flight_id": flight_id,
                "max_workers": workers,
                "api_url": api_url,
                "igc_url": igc_url,
            }
        )
        try:
            create_dir(config.target_dir)
        except OSError as e:
            raise DownloadError(
                f"Unable to create target dir: [{config.target_dir}]: {e}"
            ) from e

        manager = asyncio.run(run_session(config))

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        raise typer.Exit(code=0) from None
    except DhvXcError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        console.print(format_error_with_suggestions(e))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    if config.list_only:
        print_flight_table(manager.flights, console=console)
    print_summary_panel(manager.stats, console=console)
