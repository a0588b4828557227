"""Who may run admin commands.

The terminal does not authenticate anyone itself.  It asks an
``AuthProvider`` one question, "is this caller an admin?", and uses the
answer to gate ``users``, ``sysadmin``, ``logs``, ``shutdown`` and
``audit``.

- ``StaticAuth`` answers with a fixed value (tests, the console REPL).
- ``RemoteAuth`` asks the admin service at ``GET /api/admin/status``.
  Any failure to get a clear yes counts as no.

The question is a coroutine so a remote check never blocks the event
loop the shell runs on.
"""

from typing import Protocol

import httpx

from nexus_shell.config import DEFAULT_API_URL, DEFAULT_TIMEOUT

STATUS_PATH = "/api/admin/status"


class AuthProvider(Protocol):
    """Anything that can say whether the current caller is an admin."""

    async def is_admin(self) -> bool:
        """Return True if the caller holds admin rights."""
        ...


class StaticAuth:
    """An auth provider with a fixed answer."""

    def __init__(self, admin: bool = False) -> None:
        """Create a provider that always answers *admin*."""
        self._admin = admin

    async def is_admin(self) -> bool:
        """Return the fixed answer."""
        return self._admin


class RemoteAuth:
    """Ask the admin service whether the caller is an admin.

    The answer is fetched once and cached; call ``refresh()`` to ask
    again.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: dict[str, str] | None = None,
    ) -> None:
        """Create the provider.

        Args:
            base_url: Root URL of the admin service.
            timeout: Request timeout in seconds.
            transport: Custom transport (``httpx.MockTransport`` in tests).
            cookies: Session cookies identifying the caller.

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._cookies = cookies or {}
        self._cached: bool | None = None
        self.last_error: str | None = None

    async def refresh(self) -> bool:
        """Query the service and cache the answer."""
        self._cached = await self._fetch()
        return self._cached

    async def _fetch(self) -> bool:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                cookies=self._cookies,
            ) as client:
                response = await client.get(STATUS_PATH)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self.last_error = str(e)
            return False
        self.last_error = None
        return isinstance(data, dict) and data.get("isAdmin") is True

    async def is_admin(self) -> bool:
        """Return the cached answer, fetching it on first use."""
        if self._cached is None:
            return await self.refresh()
        return self._cached
