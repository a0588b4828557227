"""Async client for the admin REST collaborator.

Two admin commands reach outside the simulated machine:

- ``sysadmin`` reads ``GET /api/admin/diagnostics``.
- ``users`` reads ``GET /api/admin/users``.

``AdminApiClient`` wraps an ``httpx.AsyncClient`` and turns every way a
call can go wrong into one of two exceptions:

- ``ServiceUnavailableError``: the request never produced a response
  (connection refused, timeout, transport failure).
- ``ServiceResponseError``: the server answered with a non-2xx status
  or a body that is not the expected JSON shape.

The request timeout bounds how long a terminal stays locked waiting for
an answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from nexus_shell.config import DEFAULT_API_URL, DEFAULT_TIMEOUT

DIAGNOSTICS_PATH = "/api/admin/diagnostics"
USERS_PATH = "/api/admin/users"


class AdminApiError(Exception):
    """Base class for admin API failures."""


class ServiceUnavailableError(AdminApiError):
    """Raised when the admin service cannot be reached."""


class ServiceResponseError(AdminApiError):
    """Raised when the admin service answers with an error or bad payload.

    Attributes:
        status_code: The HTTP status, or None for a malformed 2xx body.

    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Create the error with an optional HTTP status."""
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class Diagnostics:
    """Host diagnostics reported by the admin service."""

    platform: str
    arch: str
    node_version: str
    system_uptime: float
    memory_total: int
    memory_free: int
    memory_used: int
    cpu_cores: int
    pid: int
    heap_used: int
    process_uptime: float

    @classmethod
    def from_json(cls, data: Any) -> Diagnostics:
        """Build from the service payload.

        Raises:
            ServiceResponseError: If a required field is missing.

        """
        try:
            system = data["system"]
            memory = data["memory"]
            process = data["process"]
            return cls(
                platform=str(system["platform"]),
                arch=str(system["arch"]),
                node_version=str(system["nodeVersion"]),
                system_uptime=float(system["uptime"]),
                memory_total=int(memory["total"]),
                memory_free=int(memory["free"]),
                memory_used=int(memory["used"]),
                cpu_cores=int(data["cpu"]["cores"]),
                pid=int(process["pid"]),
                heap_used=int(process["memoryUsage"]["heapUsed"]),
                process_uptime=float(process.get("uptime", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed diagnostics payload: {e}"
            raise ServiceResponseError(msg) from e


@dataclass(frozen=True)
class DirectoryUser:
    """One entry from the user directory."""

    id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    is_admin: bool = False
    banned: bool = False

    @property
    def display_name(self) -> str:
        """Return "First Last", falling back to the email or ``N/A``."""
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email or "N/A"

    @classmethod
    def from_json(cls, data: Any) -> DirectoryUser:
        """Build from one record of the service payload.

        Raises:
            ServiceResponseError: If the record has no ``id``.

        """
        try:
            return cls(
                id=str(data["id"]),
                email=data.get("email") or "",
                first_name=data.get("firstName") or "",
                last_name=data.get("lastName") or "",
                is_admin=bool(data.get("isAdmin", False)),
                banned=bool(data.get("banned", False)),
            )
        except (KeyError, TypeError, AttributeError) as e:
            msg = f"Malformed user record: {e}"
            raise ServiceResponseError(msg) from e


class AdminApiClient:
    """Async client for the diagnostics and user-directory endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the client.

        Args:
            base_url: Root URL of the admin service.
            timeout: Per-request timeout in seconds.
            transport: Custom transport (``httpx.MockTransport`` in tests).

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, path: str) -> Any:
        """GET *path* and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(path)
        except httpx.TimeoutException as e:
            msg = f"Request to {url} timed out after {self.timeout}s"
            raise ServiceUnavailableError(msg) from e
        except httpx.TransportError as e:
            msg = f"Failed to connect to {url}"
            raise ServiceUnavailableError(msg) from e

        if not response.is_success:
            msg = f"{url} returned HTTP {response.status_code}"
            raise ServiceResponseError(msg, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            msg = f"{url} returned a non-JSON body"
            raise ServiceResponseError(msg) from e

    async def get_diagnostics(self) -> Diagnostics:
        """Fetch host diagnostics."""
        return Diagnostics.from_json(await self._get_json(DIAGNOSTICS_PATH))

    async def list_users(self) -> list[DirectoryUser]:
        """Fetch the registered users.

        Raises:
            ServiceResponseError: If the payload is not a list of records.

        """
        data = await self._get_json(USERS_PATH)
        if not isinstance(data, list):
            msg = "User directory payload is not a list"
            raise ServiceResponseError(msg)
        return [DirectoryUser.from_json(record) for record in data]
