"""
Authentication Route Tests
============================

The OAuth provider is mocked at OAuthService; identity resolution and the
session store run for real against the in-memory database.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.responses import RedirectResponse
from sqlalchemy import func, select

from helpcenter.config import settings
from helpcenter.exceptions import DatabaseError, UpstreamAuthError
from helpcenter.models.user import User
from helpcenter.routes.auth import identity_service, oauth_service
from helpcenter.services.provider_adapters import GitHubProfile, GoogleProfile

COOKIE = settings.session_cookie_name


async def _login(client, provider: str, profile) -> "httpx.Response":  # noqa: F821
    with patch.object(oauth_service, "fetch_profile", new=AsyncMock(return_value=profile)):
        return await client.get(f"/auth/{provider}/callback?code=abc&state=xyz")


def _session_header(response) -> dict:
    return {"Cookie": f"{COOKIE}={response.cookies[COOKIE]}"}


class TestOAuthCallback:

    @pytest.mark.asyncio
    async def test_google_login_creates_user_and_session(self, test_client):
        response = await _login(
            test_client, "google", GoogleProfile(display_name="Ana", emails=["ana@example.com"])
        )

        assert response.status_code == 302
        assert response.headers["location"] == settings.login_success_redirect
        assert COOKIE in response.cookies

        test_client.cookies.clear()
        me = await test_client.get("/auth/me", headers=_session_header(response))
        assert me.status_code == 200
        assert me.json() == {"user_id": 1, "name": "Ana", "email": "ana@example.com", "phone": None}

    @pytest.mark.asyncio
    async def test_same_email_across_providers_is_one_user(self, test_client, session_factory):
        await _login(test_client, "google", GoogleProfile(display_name="Ana", emails=["ana@example.com"]))
        response = await _login(
            test_client,
            "github",
            GitHubProfile(username="ana-dev", display_name="Ana GitHub", emails=["ana@example.com"]),
        )
        assert response.status_code == 302
        assert response.headers["location"] == settings.login_success_redirect

        test_client.cookies.clear()
        me = await test_client.get("/auth/me", headers=_session_header(response))
        assert me.json()["user_id"] == 1
        assert me.json()["name"] == "Ana"

        async with session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(User))
        assert count == 1

    @pytest.mark.asyncio
    async def test_github_without_email_redirects_to_failure(self, test_client, session_factory):
        resolve = AsyncMock()
        with patch.object(identity_service, "resolve_or_create_user", new=resolve):
            response = await _login(
                test_client, "github", GitHubProfile(username="ghost", display_name=None, emails=[])
            )

        assert response.status_code == 302
        assert response.headers["location"] == settings.login_failure_redirect
        assert COOKIE not in response.cookies
        resolve.assert_not_awaited()

        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(User)) == 0

    @pytest.mark.asyncio
    async def test_github_name_falls_back_to_username(self, test_client):
        response = await _login(
            test_client, "github", GitHubProfile(username="octo", display_name=None, emails=["octo@example.com"])
        )

        test_client.cookies.clear()
        me = await test_client.get("/auth/me", headers=_session_header(response))
        assert me.json()["name"] == "octo"

    @pytest.mark.asyncio
    async def test_provider_failure_redirects_to_failure(self, test_client):
        failing = AsyncMock(side_effect=UpstreamAuthError(provider="google"))
        with patch.object(oauth_service, "fetch_profile", new=failing):
            response = await test_client.get("/auth/google/callback?code=abc")

        assert response.status_code == 302
        assert response.headers["location"] == settings.login_failure_redirect

    @pytest.mark.asyncio
    async def test_store_failure_redirects_to_failure(self, test_client):
        profile = GoogleProfile(display_name="Ana", emails=["ana@example.com"])
        with patch.object(identity_service, "resolve_or_create_user", new=AsyncMock(side_effect=DatabaseError())):
            response = await _login(test_client, "google", profile)

        assert response.status_code == 302
        assert response.headers["location"] == settings.login_failure_redirect
        assert COOKIE not in response.cookies

    @pytest.mark.asyncio
    async def test_denied_consent_redirects_to_failure(self, test_client):
        """No mock: Authlib itself rejects the callback carrying ?error=."""
        response = await test_client.get("/auth/google/callback?error=access_denied")

        assert response.status_code == 302
        assert response.headers["location"] == settings.login_failure_redirect


class TestOAuthLogin:

    @pytest.mark.asyncio
    async def test_login_redirects_with_callback_url(self, test_client):
        start = AsyncMock(return_value=RedirectResponse("https://accounts.google.com/o/oauth2/auth", status_code=302))
        with patch.object(oauth_service, "authorize_redirect", new=start):
            response = await test_client.get("/auth/google")

        assert response.status_code == 302
        assert response.headers["location"].startswith("https://accounts.google.com/")
        redirect_uri = start.await_args.args[2]
        assert redirect_uri.endswith("/auth/google/callback")

    @pytest.mark.asyncio
    async def test_login_start_failure_redirects_to_failure(self, test_client):
        start = AsyncMock(side_effect=UpstreamAuthError(provider="github"))
        with patch.object(oauth_service, "authorize_redirect", new=start):
            response = await test_client.get("/auth/github")

        assert response.status_code == 302
        assert response.headers["location"] == settings.login_failure_redirect

    @pytest.mark.asyncio
    async def test_unknown_provider_is_400(self, test_client):
        response = await test_client.get("/auth/twitter")
        assert response.status_code == 400


class TestSessionEndpoints:

    @pytest.mark.asyncio
    async def test_me_without_session_is_401(self, test_client):
        response = await test_client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Debes iniciar sesión para continuar."

    @pytest.mark.asyncio
    async def test_me_with_forged_cookie_is_401(self, test_client):
        response = await test_client.get("/auth/me", headers={"Cookie": f"{COOKIE}=forged.value"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_ends_session(self, test_client):
        login = await _login(test_client, "google", GoogleProfile(display_name="Ana", emails=["ana@example.com"]))
        test_client.cookies.clear()
        headers = _session_header(login)

        response = await test_client.post("/auth/logout", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Sesión cerrada."}

        test_client.cookies.clear()
        me = await test_client.get("/auth/me", headers=headers)
        assert me.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_without_session_is_ok(self, test_client):
        response = await test_client.post("/auth/logout")
        assert response.status_code == 200
