"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class DhvXcError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(DhvXcError):
    """Raised when the options for a run are missing or invalid."""


class TokenError(DhvXcError):
    """Raised when the API does not hand out a CSRF token."""


class AuthenticationError(DhvXcError):
    """Raised when user login fails due to invalid credentials or token."""


class APIResponseError(DhvXcError):
    """Raised when an API response cannot be decoded or has an unexpected shape."""


class DownloadError(DhvXcError):
    """Raised when a flight track cannot be written to the target directory."""
