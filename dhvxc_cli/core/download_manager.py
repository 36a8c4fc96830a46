"""
The main orchestrator: fetches the flight list, then lists, filters or
downloads the flights.
"""

import asyncio
import logging
from typing import List

from rich.markup import escape

from dhvxc_cli.api.client import DhvXcAPIClient
from dhvxc_cli.models.config import SessionConfig
from dhvxc_cli.models.flight import FlightInfo
from dhvxc_cli.models.stats import DownloadStats

from .igc_downloader import IgcDownloader

log = logging.getLogger(__name__)

# Directory used when a requested flight ID is not part of the flight list
UNLISTED_FLIGHT_DATE = "today"


class DownloadManager:
    """Orchestrates the entire download process for one logged-in session."""

    def __init__(self, config: SessionConfig, api_client: DhvXcAPIClient):
        self.config = config
        self.api_client = api_client
        self.stats = DownloadStats(list_only=config.list_only)
        self.downloader = IgcDownloader(api_client, config.target_dir)
        self.flights: List[FlightInfo] = []

    async def execute_downloads(self) -> DownloadStats:
        """
        Fetches the flight list and processes it according to the configuration.

        Any failure propagates immediately and cancels the downloads still in
        flight; flights that were already written stay on disk.
        """
        flight_list = await self.api_client.fetch_flights()
        self.flights = flight_list.data
        self.stats.flights_listed = len(self.flights)

        if self.config.list_only:
            self._list_flights()
        elif self.config.flight_id:
            await self._save_single(self.config.flight_id)
        else:
            await self._save_all()

        log.info(f"Saved [{self.stats.flights_saved}] flights")
        return self.stats

    def _list_flights(self) -> None:
        if not self.flights:
            log.info("No flights recorded for this account.")
        for flight in self.flights:
            log.info(
                escape(
                    f"Flight ID: [{flight.flight_id}] Takeoff: [{flight.takeoff}]"
                    f" Date: [{flight.date}]"
                )
            )

    async def _save_single(self, flight_id: int) -> None:
        """Saves only the flight with the requested ID."""
        for flight in self.flights:
            if flight.matches_id(flight_id):
                await self._save(flight.flight_id, flight.date)
                return

        log.warning(
            f"[yellow]Flight {flight_id} is not in the flight list, "
            f"saving it below '{UNLISTED_FLIGHT_DATE}'.[/yellow]"
        )
        await self._save(str(flight_id), UNLISTED_FLIGHT_DATE)

    async def _save_all(self) -> None:
        """Downloads every listed flight concurrently."""
        if not self.flights:
            log.info("No flights recorded for this account. Nothing to do.")
            return

        tasks = [
            asyncio.create_task(self._save(flight.flight_id, flight.date))
            for flight in self.flights
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # Stop the remaining downloads before the session is closed
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _save(self, flight_id: str, date: str) -> None:
        path, size = await self.downloader.save_flight(flight_id, date)
        await self.stats.record_saved(str(path), size)
