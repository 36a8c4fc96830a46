"""
Handles fetching a single flight's IGC track log and writing it to disk.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
from rich.markup import escape

from dhvxc_cli.api.client import DhvXcAPIClient
from dhvxc_cli.exceptions import DownloadError
from dhvxc_cli.utils.path import create_dir, igc_path

log = logging.getLogger(__name__)

# Track logs are written under this suffix and renamed once complete
PARTIAL_SUFFIX = ".part"


class IgcDownloader:
    """Saves track logs into '<target_dir>/<date>/<flight_id>.igc'."""

    def __init__(self, api_client: DhvXcAPIClient, target_dir: Path):
        self.api_client = api_client
        self.target_dir = Path(target_dir)

    async def save_flight(self, flight_id: str, date: str) -> tuple[Path, int]:
        """
        Downloads one track log and writes it below the target directory.

        Args:
            flight_id: The flight's ID as listed by the API.
            date: The flight date, used as the directory name.

        Returns:
            The written path and the number of bytes written.
        """
        destination = igc_path(self.target_dir, date, flight_id)
        try:
            await asyncio.to_thread(create_dir, destination.parent)
        except OSError as e:
            raise DownloadError(
                f"Unable to create target dir: [{destination.parent}]: {e}"
            ) from e

        igc_data = await self.api_client.fetch_igc(flight_id)

        log.info(escape(f"Saving flight: [{flight_id}] to: [{destination}]"))
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            async with aiofiles.open(partial, "wb") as f:
                await f.write(igc_data)
            await asyncio.to_thread(os.replace, partial, destination)
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Unable to write '{destination}': {e}") from e
        except asyncio.CancelledError:
            partial.unlink(missing_ok=True)
            raise

        return destination, len(igc_data)
