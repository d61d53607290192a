"""
OAuth Provider Client Tests
=============================

OAuthService with a fake Authlib client: no network.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from authlib.integrations.starlette_client import OAuth, OAuthError

from helpcenter.exceptions import UpstreamAuthError
from helpcenter.services.oauth_service import OAuthService, Provider, github_emails
from helpcenter.services.provider_adapters import GitHubProfile, GoogleProfile


def _json_response(url: str, payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("GET", url))


def _service_with(client) -> OAuthService:
    service = OAuthService()
    service._client = MagicMock(return_value=client)
    return service


class TestGithubEmails:

    def test_primary_first_and_unverified_dropped(self):
        payload = [
            {"email": "old@example.com", "primary": False, "verified": True},
            {"email": "spam@example.com", "primary": False, "verified": False},
            {"email": "main@example.com", "primary": True, "verified": True},
        ]
        assert github_emails(payload) == ["main@example.com", "old@example.com"]

    def test_unexpected_payload(self):
        assert github_emails({"message": "Not Found"}) == []


class TestRegistration:

    def test_configured_providers_are_registered(self):
        service = OAuthService()
        assert service.oauth.create_client("google") is not None
        assert service.oauth.create_client("github") is not None

    @pytest.mark.asyncio
    async def test_unconfigured_provider_raises(self):
        service = OAuthService()
        service.oauth = OAuth()

        with pytest.raises(UpstreamAuthError) as exc_info:
            await service.fetch_profile(Provider.github, MagicMock())
        assert exc_info.value.context["provider"] == "github"


class TestFetchProfile:

    @pytest.mark.asyncio
    async def test_google_profile_from_id_token_claims(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(
            return_value={"access_token": "t", "userinfo": {"name": "Ana", "email": "ana@example.com"}}
        )
        client.userinfo = AsyncMock()

        profile = await _service_with(client).fetch_profile(Provider.google, MagicMock())

        assert profile == GoogleProfile(display_name="Ana", emails=["ana@example.com"])
        client.userinfo.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_google_profile_falls_back_to_userinfo(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(return_value={"access_token": "t"})
        client.userinfo = AsyncMock(return_value={"name": "Ana"})

        profile = await _service_with(client).fetch_profile(Provider.google, MagicMock())

        assert profile == GoogleProfile(display_name="Ana", emails=[])

    @pytest.mark.asyncio
    async def test_github_profile_uses_emails_endpoint(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(return_value={"access_token": "t"})
        client.get = AsyncMock(side_effect=[
            _json_response("https://api.github.com/user", {"login": "octo", "name": None, "email": None}),
            _json_response(
                "https://api.github.com/user/emails",
                [{"email": "octo@example.com", "primary": True, "verified": True}],
            ),
        ])

        profile = await _service_with(client).fetch_profile(Provider.github, MagicMock())

        assert profile == GitHubProfile(username="octo", display_name=None, emails=["octo@example.com"])

    @pytest.mark.asyncio
    async def test_github_profile_falls_back_to_public_email(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(return_value={"access_token": "t"})
        client.get = AsyncMock(side_effect=[
            _json_response("https://api.github.com/user", {"login": "octo", "email": "public@example.com"}),
            _json_response("https://api.github.com/user/emails", {"message": "Forbidden"}, status_code=403),
        ])

        profile = await _service_with(client).fetch_profile(Provider.github, MagicMock())

        assert profile.emails == ["public@example.com"]

    @pytest.mark.asyncio
    async def test_github_user_endpoint_error(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(return_value={"access_token": "t"})
        client.get = AsyncMock(return_value=_json_response("https://api.github.com/user", {}, status_code=401))

        with pytest.raises(UpstreamAuthError) as exc_info:
            await _service_with(client).fetch_profile(Provider.github, MagicMock())
        assert exc_info.value.context["error_type"] == "HTTPStatusError"

    @pytest.mark.asyncio
    async def test_oauth_error_becomes_upstream_error(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(side_effect=OAuthError(error="access_denied"))

        with pytest.raises(UpstreamAuthError) as exc_info:
            await _service_with(client).fetch_profile(Provider.google, MagicMock())
        assert exc_info.value.context["stage"] == "callback"
