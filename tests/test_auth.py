"""Tests for the admin-check providers."""

from typing import Any

import httpx

from nexus_shell.auth import RemoteAuth, StaticAuth


def _remote(handler: Any) -> RemoteAuth:
    """Create a RemoteAuth answered by *handler*."""
    return RemoteAuth("http://admin.test", transport=httpx.MockTransport(handler))


class TestStaticAuth:
    """Verify the fixed-answer provider."""

    async def test_defaults_to_not_admin(self) -> None:
        """The default answer is no."""
        assert await StaticAuth().is_admin() is False

    async def test_admin(self) -> None:
        """An admin provider says yes."""
        assert await StaticAuth(admin=True).is_admin() is True


class TestRemoteAuth:
    """Verify the service-backed provider."""

    async def test_admin_true(self) -> None:
        """``{"isAdmin": true}`` grants admin."""
        auth = _remote(lambda request: httpx.Response(200, json={"isAdmin": True}))
        assert await auth.is_admin() is True

    async def test_admin_false(self) -> None:
        """``{"isAdmin": false}`` does not."""
        auth = _remote(lambda request: httpx.Response(200, json={"isAdmin": False}))
        assert await auth.is_admin() is False

    async def test_truthy_non_bool_is_not_admin(self) -> None:
        """Only a literal true counts."""
        auth = _remote(lambda request: httpx.Response(200, json={"isAdmin": "yes"}))
        assert await auth.is_admin() is False

    async def test_http_error_is_not_admin(self) -> None:
        """A non-2xx answer counts as no and records the error."""
        auth = _remote(lambda request: httpx.Response(401, json={"error": "unauthorised"}))
        assert await auth.is_admin() is False
        assert auth.last_error is not None

    async def test_unreachable_is_not_admin(self) -> None:
        """A connection failure counts as no."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert await _remote(refuse).is_admin() is False

    async def test_answer_is_cached_until_refresh(self) -> None:
        """The service is asked once; refresh asks again."""
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(200, json={"isAdmin": len(calls) > 1})

        auth = _remote(handler)
        assert await auth.is_admin() is False
        assert await auth.is_admin() is False
        assert calls == ["/api/admin/status"]
        assert await auth.refresh() is True
        assert await auth.is_admin() is True
