"""Shared pytest fixtures for the dhvxc_cli tests.

Provides an in-process fake of the DHV-XC API so the client, the
authenticator and the download manager can be exercised over real HTTP
without touching the network.
"""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from dhvxc_cli.models.config import SessionConfig

TOKEN = "csrf-token-123"
SESSION_COOKIE = "PHPSESSID"


def igc_content(flight_id: str) -> bytes:
    return f"AXCT{flight_id}\r\nHFDTE140522\r\nB1101355206343N00006198WA0058700558\r\n".encode()


class FakeDhvXc:
    """Minimal stand-in for the DHV-XC endpoints used by the client."""

    def __init__(self, user: str = "pilot", password: str = "secret") -> None:
        self.user = user
        self.password = password
        self.flights: list[dict[str, Any]] = [
            {"idflight": "1001", "FlightDate": "2022-05-14", "takeofflocation": "Brauneck"},
            {"idflight": 1002, "FlightDate": "2022-05-15", "takeofflocation": "Tegelberg"},
            {"idflight": "1003", "FlightDate": "2022-05-15", "takeofflocation": None},
        ]
        self.status_payload: dict[str, Any] = {"success": True, "meta": {"token": TOKEN}}
        self.flights_payload: Any = None
        self.igc_status: dict[str, int] = {}
        self.igc_delay: dict[str, float] = {}
        self.login_status = 200
        self.requests: list[tuple[str, str, str | None]] = []
        self.login_bodies: list[dict[str, Any]] = []
        self.cookies_seen: list[str | None] = []

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/xc/login/status", self.status)
        app.router.add_post("/api/xc/login/login", self.login)
        app.router.add_get("/api/fli/flights", self.list_flights)
        app.router.add_get("/flight/{flight_id}/igc", self.igc)
        return app

    def _record(self, request: web.Request) -> None:
        self.requests.append(
            (request.method, request.path, request.headers.get("X-CSRF-Token"))
        )
        self.cookies_seen.append(request.cookies.get(SESSION_COOKIE))

    def _authorized(self, request: web.Request) -> bool:
        return request.headers.get("X-CSRF-Token") == TOKEN

    async def status(self, request: web.Request) -> web.Response:
        self._record(request)
        response = web.json_response(self.status_payload)
        response.set_cookie(SESSION_COOKIE, "session-1")
        return response

    async def login(self, request: web.Request) -> web.Response:
        self._record(request)
        body = await request.json()
        self.login_bodies.append(body)
        if self.login_status != 200:
            return web.json_response(
                {"success": False, "message": "Unauthorized"}, status=self.login_status
            )
        if not self._authorized(request):
            return web.json_response({"success": False, "message": "Invalid token"})
        if body != {"uid": self.user, "pwd": self.password}:
            return web.json_response({"success": False, "message": "Wrong credentials"})
        return web.json_response({"success": True, "message": "Logged in"})

    async def list_flights(self, request: web.Request) -> web.Response:
        self._record(request)
        if request.query.get("mine") != "1":
            return web.json_response({"success": False, "message": "mine missing"}, status=400)
        if not self._authorized(request):
            return web.json_response({"success": False, "message": "Forbidden"}, status=403)
        if self.flights_payload is not None:
            if isinstance(self.flights_payload, str):
                return web.Response(text=self.flights_payload, content_type="text/html")
            return web.json_response(self.flights_payload)
        return web.json_response({"data": self.flights, "success": True, "message": ""})

    async def igc(self, request: web.Request) -> web.Response:
        self._record(request)
        flight_id = request.match_info["flight_id"]
        if flight_id in self.igc_delay:
            await asyncio.sleep(self.igc_delay[flight_id])
        status = self.igc_status.get(flight_id, 200)
        if status != 200:
            return web.Response(status=status, text="not found")
        if not self._authorized(request):
            return web.Response(status=403, text="forbidden")
        return web.Response(body=igc_content(flight_id), content_type="application/octet-stream")


@pytest.fixture
def fake_api() -> FakeDhvXc:
    return FakeDhvXc()


@pytest.fixture
def serve(fake_api: FakeDhvXc) -> Callable[[Callable[[TestServer], Awaitable[Any]]], Any]:
    """Runs a coroutine factory against a live fake server on a fresh event loop."""

    def _serve(scenario: Callable[[TestServer], Awaitable[Any]]) -> Any:
        async def _run() -> Any:
            async with TestServer(fake_api.make_app()) as server:
                return await scenario(server)

        return asyncio.run(_run())

    return _serve


@pytest.fixture
def make_config() -> Callable[..., SessionConfig]:
    """Builds a SessionConfig pointing at a running fake server."""

    def _make(server: TestServer, target_dir: Path, **overrides: Any) -> SessionConfig:
        options: dict[str, Any] = {
            "user": "pilot",
            "password": "secret",
            "target_dir": target_dir,
            "api_url": str(server.make_url("/api/")),
            "igc_url": f"{server.make_url('/flight/')}{{flight_id}}/igc",
        }
        options.update(overrides)
        return SessionConfig(**options)

    return _make
