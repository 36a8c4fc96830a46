"""
DHV-XC API Layer.

This package handles all communication with the DHV-XC web API.
"""

from .auth import DhvXcAuthenticator
from .client import DhvXcAPIClient

__all__ = ["DhvXcAPIClient", "DhvXcAuthenticator"]
