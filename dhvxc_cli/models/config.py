"""
Pydantic model for the configuration of a run.
Provides robust validation for all settings.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from dhvxc_cli.exceptions import ConfigurationError

from .flight import LoginCredentials

DEFAULT_API_URL = "https://de.dhv-xc.de/api/"
DEFAULT_IGC_URL = "https://en.dhv-xc.de/flight/{flight_id}/igc"


class SessionConfig(BaseModel):
    """A validated configuration model for one run."""

    # Authentication
    user: str
    password: str = Field(..., repr=False)

    # Download Settings
    target_dir: Path
    list_only: bool = False
    flight_id: int = 0
    max_workers: int = 8

    # Endpoints
    api_url: str = DEFAULT_API_URL
    igc_url: str = DEFAULT_IGC_URL

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True

    @field_validator("user", "password")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("User name and password must not be empty.")
        return v

    @field_validator("flight_id")
    @classmethod
    def validate_flight_id(cls, v: int) -> int:
        """0 means 'all flights'; anything else must be a real ID."""
        if v < 0:
            raise ValueError("Flight ID must be a positive number.")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 32:
            raise ValueError("Max workers must be between 1 and 32.")
        return v

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"API URL must be an http(s) URL, got: {v}")
        return v if v.endswith("/") else v + "/"

    @field_validator("igc_url")
    @classmethod
    def validate_igc_url(cls, v: str) -> str:
        if "{flight_id}" not in v:
            raise ValueError("IGC URL template must contain '{flight_id}'.")
        try:
            v.format(flight_id="0")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"IGC URL template may only use the '{{flight_id}}' placeholder: {e!r}"
            ) from e
        return v.strip()

    @property
    def credentials(self) -> LoginCredentials:
        return LoginCredentials(user=self.user, password=self.password)


def load_config(cli_options: dict[str, Any]) -> SessionConfig:
    """
    Builds a validated SessionConfig from the options given on the command line.

    Args:
        cli_options: A dictionary of options provided via the command line.
            Options that were not given (None) fall back to the model defaults.

    Returns:
        A validated SessionConfig object.

    Raises:
        ConfigurationError: If validation fails.
    """
    options = {key: value for key, value in cli_options.items() if value is not None}
    try:
        return SessionConfig(**options)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed:\n{e}") from e
