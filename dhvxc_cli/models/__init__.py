"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application, such as flights, configuration
and statistics.
"""

from .config import SessionConfig, load_config
from .flight import FlightInfo, FlightList, LoginCredentials
from .stats import DownloadStats

__all__ = [
    "DownloadStats",
    "FlightInfo",
    "FlightList",
    "LoginCredentials",
    "SessionConfig",
    "load_config",
]
