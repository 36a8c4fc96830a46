"""
Utilities for handling file paths of downloaded track logs.
"""

from pathlib import Path

from pathvalidate import sanitize_filename

IGC_EXTENSION = "igc"
UNDATED_DIR = "undated"

# Names that are valid file names but refer to the directory itself or its parent
_RELATIVE_NAMES = ("", ".", "..")


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def flight_dir(target_dir: Path, date: str) -> Path:
    """
    Returns the per-date directory for a flight.

    The date comes straight from the API, so it is sanitized to a single path
    component and cannot point outside of the target directory.
    """
    name = sanitize_filename(date.strip(), platform="auto")
    if name in _RELATIVE_NAMES:
        name = UNDATED_DIR
    return Path(target_dir) / name


def igc_path(target_dir: Path, date: str, flight_id: str) -> Path:
    """Builds '<target_dir>/<date>/<flight_id>.igc'."""
    file_name = sanitize_filename(f"{flight_id}.{IGC_EXTENSION}", platform="auto")
    return flight_dir(target_dir, date) / file_name
