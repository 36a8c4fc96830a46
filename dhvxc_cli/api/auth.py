"""
Handles authentication with the DHV-XC API: fetching the CSRF token and
logging in with user credentials.
"""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp
from rich.markup import escape

from dhvxc_cli.exceptions import AuthenticationError, TokenError
from dhvxc_cli.models.flight import LoginCredentials

if TYPE_CHECKING:
    from .client import DhvXcAPIClient

log = logging.getLogger(__name__)


def is_success(response: dict[str, Any]) -> bool:
    """Checks the 'success' flag the API puts into every response."""
    return bool(response.get("success"))


class DhvXcAuthenticator:
    """
    Manages the authentication flow for the DHV-XC API client.
    """

    def __init__(self, api_client: "DhvXcAPIClient"):
        """
        Initializes the authenticator.

        Args:
            api_client: A reference to the main DhvXcAPIClient instance.
        """
        self._api_client = api_client

    async def fetch_token(self) -> str:
        """
        Asks the login status endpoint for a CSRF token and stores it on the client.

        Returns:
            The token string.
        """
        response = await self._api_client.api_call(self._api_client.TOKEN_ENDPOINT)
        if not is_success(response):
            raise TokenError(f"Unable to get token: [{response.get('message', '')}]")

        meta = response.get("meta")
        token = meta.get("token") if isinstance(meta, dict) else None
        if not token:
            raise TokenError("Unable to get token: [response carries no token]")

        self._api_client.csrf_token = str(token)
        return self._api_client.csrf_token

    async def login(self, credentials: LoginCredentials) -> dict[str, Any]:
        """
        Logs in with user name and password. Requires a token from fetch_token.

        Returns:
            The login response dictionary from the API.
        """
        try:
            response = await self._api_client.api_call(
                self._api_client.LOGIN_ENDPOINT,
                method="POST",
                payload=credentials.to_payload(),
            )
        except aiohttp.ClientResponseError as e:
            if e.status in (401, 403):
                raise AuthenticationError(
                    f"Authentication failed: [{e.status} {e.message}]"
                ) from e
            raise

        if not is_success(response):
            raise AuthenticationError(
                f"Authentication failed: [{response.get('message', '')}]"
            )
        return response

    async def authenticate(self, credentials: LoginCredentials) -> str:
        """
        Runs the full flow: token first, then login.

        Returns:
            The CSRF token used for the rest of the session.
        """
        log.info(f"Authenticating as: {escape(credentials.user)}")
        token = await self.fetch_token()
        log.info(escape(f"Got token: [{token}]"))
        await self.login(credentials)
        log.info("Logged in")
        return token
