"""
Dataclass for tracking the statistics of a single run.
"""

import asyncio
import time
from dataclasses import dataclass, field


@dataclass
class DownloadStats:
    """Tracks how many flights were listed and saved during a run."""

    flights_listed: int = 0
    flights_saved: int = 0
    total_size_downloaded: int = 0
    list_only: bool = False
    saved_paths: list[str] = field(default_factory=list, repr=False)

    _start_time: float = field(default=0.0, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def __post_init__(self):
        self._start_time = time.monotonic()

    async def record_saved(self, path: str, size_bytes: int) -> None:
        """
        Counts one saved flight. Safe to call from concurrent download tasks.

        Args:
            path: Where the track log was written.
            size_bytes: Size of the written file.
        """
        async with self._lock:
            self.flights_saved += 1
            self.total_size_downloaded += size_bytes
            self.saved_paths.append(path)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start_time
