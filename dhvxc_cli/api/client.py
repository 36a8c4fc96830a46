"""
Async client for the DHV-XC JSON API with a cookie-backed session.
"""

import json
import logging
from typing import Any, Dict, Optional

import aiohttp
from aiohttp.abc import AbstractCookieJar
from pydantic import ValidationError
from rich.markup import escape

from dhvxc_cli.exceptions import APIResponseError
from dhvxc_cli.models.config import DEFAULT_API_URL, DEFAULT_IGC_URL
from dhvxc_cli.models.flight import FlightList
from dhvxc_cli.utils.formatting import mask_secret

from .auth import DhvXcAuthenticator

log = logging.getLogger(__name__)


class DhvXcAPIClient:
    """
    Async client for the DHV-XC web API.

    All requests go through one aiohttp session so that the cookies set during
    login are sent along with the flight list and track log requests. Once a
    CSRF token is known it is attached to every request as 'X-CSRF-Token'.
    """

    TOKEN_ENDPOINT = "xc/login/status"
    LOGIN_ENDPOINT = "xc/login/login"
    FLIGHTS_ENDPOINT = "fli/flights"

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        igc_url: str = DEFAULT_IGC_URL,
        max_workers: int = 8,
        cookie_jar: Optional[AbstractCookieJar] = None,
    ):
        """
        Initializes the API client.

        Args:
            base_url: Base URL of the JSON API, ending with a slash.
            igc_url: URL template for track logs, containing '{flight_id}'.
            max_workers: The number of concurrent downloads, used to size the
                connection pool.
            cookie_jar: Optional cookie jar; a fresh one is created otherwise.
        """
        self.base_url = base_url
        self.igc_url = igc_url
        self.max_workers = max_workers

        # State set by the authenticator
        self.csrf_token: Optional[str] = None

        self._cookie_jar = cookie_jar
        self._session: Optional[aiohttp.ClientSession] = None
        self._authenticator = DhvXcAuthenticator(self)

    @property
    def authenticator(self) -> DhvXcAuthenticator:
        """Provides access to the authentication helper."""
        return self._authenticator

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_workers * 2,
                limit_per_host=self.max_workers,
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                cookie_jar=self._cookie_jar or aiohttp.CookieJar(),
                headers={"Content-Type": "application/json; charset=UTF-8"},
                timeout=aiohttp.ClientTimeout(total=120, connect=15, sock_read=60),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "DhvXcAPIClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def request(
        self,
        url: str,
        method: str = "GET",
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> bytes:
        """
        Sends a single request and returns the raw response body.

        A JSON payload is only sent with POST requests.

        Raises:
            aiohttp.ClientResponseError: If the server answers with an error status.
        """
        await self._initialize_session()

        log.debug(f"{method} {url}")
        if payload is not None:
            log.debug(escape(f"Request: [{json.dumps(mask_secret(payload))}]"))

        headers = {}
        if self.csrf_token:
            log.debug("Setting token header")
            headers["X-CSRF-Token"] = self.csrf_token

        data = json.dumps(payload) if method == "POST" and payload is not None else None

        async with self._session.request(
            method, url, data=data, params=params, headers=headers
        ) as r:
            body = await r.read()
            preview = body[:2048].decode("utf-8", "replace")
            log.debug(escape(f"Response: [{preview}]"))
            if r.cookies:
                log.debug(escape(f"Got cookies: [{', '.join(r.cookies.keys())}]"))
            r.raise_for_status()
            return body

    async def api_call(
        self,
        endpoint: str,
        method: str = "GET",
        payload: Optional[Dict[str, Any]] = None,
        **params: Any,
    ) -> Dict[str, Any]:
        """
        Calls a JSON API endpoint and decodes the response object.

        Raises:
            APIResponseError: If the body is not a JSON object.
        """
        body = await self.request(
            self.base_url + endpoint,
            method=method,
            payload=payload,
            params={k: str(v) for k, v in params.items()} or None,
        )
        try:
            result = json.loads(body)
        except ValueError as e:
            raise APIResponseError(
                f"Can't load JSON response from '{endpoint}': {e}"
            ) from e

        if not isinstance(result, dict):
            raise APIResponseError(
                f"Expected a JSON object from '{endpoint}', "
                f"got {type(result).__name__}."
            )
        return result

    # Public API Methods
    async def fetch_flights(self) -> FlightList:
        """Fetches the list of flights recorded by the logged-in user."""
        response = await self.api_call(self.FLIGHTS_ENDPOINT, mine=1)
        try:
            flights = FlightList.model_validate(response)
        except ValidationError as e:
            raise APIResponseError(f"Unexpected flight list response:\n{e}") from e

        if flights.success is False:
            raise APIResponseError(
                f"Unable to fetch flight list: [{flights.message}]"
            )
        log.debug(f"Flight list contains {len(flights.data)} flights.")
        return flights

    async def fetch_igc(self, flight_id: str) -> bytes:
        """Downloads the IGC track log of a single flight."""
        return await self.request(self.igc_url.format(flight_id=flight_id))
