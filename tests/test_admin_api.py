"""Tests for the admin REST client and the commands that use it.

The client is exercised against ``httpx.MockTransport`` so no network
is involved.  The ``users`` and ``sysadmin`` tests go through the shell
to check how each failure mode is rendered.
"""

from typing import Any

import httpx
import pytest

from nexus_shell.admin_api import (
    AdminApiClient,
    Diagnostics,
    DirectoryUser,
    ServiceResponseError,
    ServiceUnavailableError,
)
from nexus_shell.auth import StaticAuth
from nexus_shell.session import Session
from nexus_shell.shell import Outcome, Shell

_BASE = "http://admin.test"

DIAGNOSTICS: dict[str, Any] = {
    "system": {"platform": "linux", "arch": "x64", "nodeVersion": "v20.11.0", "uptime": 7380},
    "memory": {"total": 8 * 1024**3, "free": 2 * 1024**3, "used": 6 * 1024**3},
    "cpu": {"cores": 8},
    "process": {"pid": 4242, "memoryUsage": {"heapUsed": 50 * 1024**2}, "uptime": 120},
}

USERS: list[dict[str, Any]] = [
    {"id": "u-1", "email": "ada@example.com", "firstName": "Ada", "lastName": "Lovelace"},
    {"id": "u-2", "email": "bob@example.com", "banned": True, "isAdmin": True},
    {"id": "u-3"},
]


def _client(handler: Any) -> AdminApiClient:
    """Create a client whose requests are answered by *handler*."""
    return AdminApiClient(_BASE, timeout=1.0, transport=httpx.MockTransport(handler))


def _serving(status: int = 200, **routes: Any) -> AdminApiClient:
    """Create a client over a fake service answering fixed JSON per path."""

    def handler(request: httpx.Request) -> httpx.Response:
        for path, body in routes.items():
            if request.url.path == f"/api/admin/{path}":
                return httpx.Response(status, json=body)
        return httpx.Response(404, json={"error": "not found"})

    return _client(handler)


def _admin_shell(api: AdminApiClient) -> Shell:
    """Create an admin shell using *api*."""
    return Shell(Session(auth=StaticAuth(admin=True), api=api))


class TestModels:
    """Verify payload parsing."""

    def test_diagnostics_from_json(self) -> None:
        """Every nested field is read."""
        d = Diagnostics.from_json(DIAGNOSTICS)
        assert d.node_version == "v20.11.0"
        assert d.cpu_cores == 8
        assert d.heap_used == 50 * 1024**2

    def test_diagnostics_missing_field(self) -> None:
        """A missing section is a response error."""
        with pytest.raises(ServiceResponseError, match="Malformed"):
            Diagnostics.from_json({"system": {}})

    def test_user_display_name(self) -> None:
        """The display name falls back to the email, then N/A."""
        assert DirectoryUser.from_json(USERS[0]).display_name == "Ada Lovelace"
        assert DirectoryUser.from_json(USERS[1]).display_name == "bob@example.com"
        assert DirectoryUser.from_json(USERS[2]).display_name == "N/A"

    def test_user_without_id(self) -> None:
        """A record without an id is a response error."""
        with pytest.raises(ServiceResponseError):
            DirectoryUser.from_json({"email": "x@example.com"})


class TestClient:
    """Verify the client's error mapping."""

    async def test_get_diagnostics(self) -> None:
        """A 200 with a full body parses."""
        d = await _serving(diagnostics=DIAGNOSTICS).get_diagnostics()
        assert d.platform == "linux"

    async def test_list_users(self) -> None:
        """The user list parses in order."""
        users = await _serving(users=USERS).list_users()
        assert [u.id for u in users] == ["u-1", "u-2", "u-3"]

    async def test_non_2xx_is_response_error(self) -> None:
        """A non-2xx status carries its code."""
        with pytest.raises(ServiceResponseError) as info:
            await _serving(status=500, users=[]).list_users()
        assert info.value.status_code == 500

    async def test_non_json_success_has_no_status(self) -> None:
        """A 200 whose body is not JSON is a response error without a status."""
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ServiceResponseError, match="non-JSON") as info:
            await client.list_users()
        assert info.value.status_code is None

    async def test_non_list_users_payload(self) -> None:
        """A users payload that is not a list is rejected."""
        with pytest.raises(ServiceResponseError, match="not a list"):
            await _serving(users={"users": []}).list_users()

    async def test_connection_refused(self) -> None:
        """A transport failure is reported as unavailable."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ServiceUnavailableError, match="Failed to connect"):
            await _client(refuse).get_diagnostics()

    async def test_timeout(self) -> None:
        """A timeout is reported as unavailable."""

        def slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ServiceUnavailableError, match="timed out"):
            await _client(slow).get_diagnostics()


class TestUsersCommand:
    """Verify the users command's rendering."""

    async def test_table(self) -> None:
        """Users are shown in a table with status and tags."""
        out = (await _admin_shell(_serving(users=USERS)).execute("users")).text
        lines = out.splitlines()
        assert lines[0] == "USER ID          | NAME                | STATUS      | TAGS"
        assert lines[1] == "-" * 80
        assert lines[2].startswith("u-1             | Ada Lovelace        | ")
        assert "\x1b[32mActive\x1b[0m" in lines[2]
        assert "\x1b[31mBANNED\x1b[0m" in lines[3]
        assert "ADMIN" in lines[3]

    async def test_empty(self) -> None:
        """An empty directory says so."""
        outcome = await _admin_shell(_serving(users=[])).execute("users")
        assert outcome == Outcome("No registered users")

    async def test_http_error(self) -> None:
        """A non-2xx answer is a fetch failure."""
        outcome = await _admin_shell(_serving(status=503, users=[])).execute("users")
        assert outcome == Outcome("Failed to fetch users", is_error=True)

    async def test_non_json_success(self) -> None:
        """A 200 with an HTML body is an error fetching users, not a failed fetch."""
        api = _client(lambda request: httpx.Response(200, text="<html>"))
        outcome = await _admin_shell(api).execute("users")
        assert outcome == Outcome("Error fetching users", is_error=True)

    async def test_unreachable(self) -> None:
        """An unreachable service is an error fetching users."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        outcome = await _admin_shell(_client(refuse)).execute("users")
        assert outcome == Outcome("Error fetching users", is_error=True)

    async def test_denied_without_admin(self) -> None:
        """Non-admins never reach the service."""
        calls: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=[])

        shell = Shell(Session(auth=StaticAuth(admin=False), api=_client(record)))
        outcome = await shell.execute("users")
        assert outcome.text == "users: Permission denied - Admin access required"
        assert calls == []


class TestSysadminCommand:
    """Verify the sysadmin panel."""

    async def test_panel(self) -> None:
        """The panel shows platform, memory and process details."""
        out = (await _admin_shell(_serving(diagnostics=DIAGNOSTICS)).execute("sysadmin")).text
        assert out.startswith("System Administration Panel\n" + "=" * 30)
        assert "Node Version: v20.11.0" in out
        assert "System Uptime: 2h 3m" in out
        assert "  Total: 8.00 GB" in out
        assert "  Used:  6.00 GB" in out
        assert "  PID: 4242" in out
        assert "  Heap Used: 50.0 MB" in out

    async def test_http_error(self) -> None:
        """A non-2xx answer is a diagnostics failure."""
        outcome = await _admin_shell(_serving(status=500, diagnostics={})).execute("sysadmin")
        assert outcome == Outcome("Failed to fetch diagnostics", is_error=True)

    async def test_malformed_body(self) -> None:
        """A 200 with a broken body is an error fetching system info."""
        outcome = await _admin_shell(_serving(diagnostics={"system": {}})).execute("sysadmin")
        assert outcome == Outcome("Error fetching system info", is_error=True)
