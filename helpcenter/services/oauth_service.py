"""
Help Center Backend — OAuth Provider Client
=============================================

What:  Talks to Google and GitHub over the authorization-code flow and returns
       a provider profile (see provider_adapters.py).
How:   Authlib's Starlette integration. The OAuth `state` (and the OIDC nonce
       for Google) is kept in Starlette's SessionMiddleware cookie between the
       redirect and the callback: that cookie is the "pending" session state.

Providers:
    google   OpenID Connect discovery, scope "openid email profile"; the
             profile comes from the validated ID token claims, falling back to
             the userinfo endpoint
    github   plain OAuth2, scope "user:email"; profile from GET /user, emails
             from GET /user/emails (verified addresses, primary first), falling
             back to the public email on /user

A provider without client credentials is not registered; using it raises
UpstreamAuthError so the route redirects to the login page.

Error policy:
    Every failure (denied consent, state mismatch, token exchange, HTTP error,
    unexpected payload) becomes UpstreamAuthError. One attempt, no retries;
    outbound HTTP is bounded by OAUTH_HTTP_TIMEOUT.
"""

import logging
from enum import Enum
from typing import Any, Dict, List

import httpx
from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request
from starlette.responses import RedirectResponse

from helpcenter.config import settings
from helpcenter.exceptions import UpstreamAuthError
from helpcenter.services.provider_adapters import (
    GitHubProfile,
    GoogleProfile,
    ProviderProfile,
)

logger = logging.getLogger(__name__)

GOOGLE_DISCOVERY_URL = "https://accounts.google.com/.well-known/openid-configuration"


class Provider(str, Enum):
    google = "google"
    github = "github"


def github_emails(payload: Any) -> List[str]:
    """
    Pick usable addresses from a GET /user/emails payload.

    Unverified addresses are skipped; the primary address goes first.
    """
    if not isinstance(payload, list):
        return []
    verified = [
        entry for entry in payload
        if isinstance(entry, dict) and entry.get("email") and entry.get("verified", True)
    ]
    verified.sort(key=lambda entry: not entry.get("primary", False))
    return [str(entry["email"]) for entry in verified]


class OAuthService:
    """Registry of configured providers plus the two flow steps."""

    def __init__(self) -> None:
        self.oauth = OAuth()
        self._register_providers()

    def _register_providers(self) -> None:
        timeout = settings.oauth_http_timeout

        if settings.google_client_id and settings.google_client_secret:
            self.oauth.register(
                name=Provider.google.value,
                client_id=settings.google_client_id,
                client_secret=settings.google_client_secret,
                server_metadata_url=GOOGLE_DISCOVERY_URL,
                client_kwargs={"scope": "openid email profile", "timeout": timeout},
            )
        else:
            logger.warning("Google OAuth credentials missing; Google login disabled")

        if settings.github_client_id and settings.github_client_secret:
            self.oauth.register(
                name=Provider.github.value,
                client_id=settings.github_client_id,
                client_secret=settings.github_client_secret,
                access_token_url="https://github.com/login/oauth/access_token",
                authorize_url="https://github.com/login/oauth/authorize",
                api_base_url="https://api.github.com/",
                client_kwargs={"scope": "user:email", "timeout": timeout},
            )
        else:
            logger.warning("GitHub OAuth credentials missing; GitHub login disabled")

    def _client(self, provider: Provider):
        client = self.oauth.create_client(provider.value)
        if client is None:
            raise UpstreamAuthError(
                provider=provider.value,
                context={"reason": "provider not configured"},
            )
        return client

    async def authorize_redirect(
        self, provider: Provider, request: Request, redirect_uri: str
    ) -> RedirectResponse:
        """Start the flow: store state in the session and redirect to the provider."""
        client = self._client(provider)
        try:
            return await client.authorize_redirect(request, redirect_uri)
        except (OAuthError, httpx.HTTPError) as e:
            logger.error("Could not start %s login: %s", provider.value, str(e))
            raise UpstreamAuthError(
                provider=provider.value,
                context={"stage": "authorize", "error_type": type(e).__name__},
            )

    async def fetch_profile(self, provider: Provider, request: Request) -> ProviderProfile:
        """
        Finish the flow on the callback request and return the raw profile.

        Raises:
            UpstreamAuthError: anything went wrong on the provider side
        """
        client = self._client(provider)
        try:
            token = await client.authorize_access_token(request)
            if provider is Provider.google:
                return await self._google_profile(client, token)
            return await self._github_profile(client, token)
        except (OAuthError, httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.warning("%s callback failed: %s", provider.value, str(e))
            raise UpstreamAuthError(
                provider=provider.value,
                context={"stage": "callback", "error_type": type(e).__name__},
            )

    async def _google_profile(self, client, token: Dict[str, Any]) -> GoogleProfile:
        claims = token.get("userinfo")
        if not claims:
            claims = await client.userinfo(token=token)
        email = claims.get("email")
        return GoogleProfile(
            display_name=claims.get("name"),
            emails=[email] if email else [],
        )

    async def _github_profile(self, client, token: Dict[str, Any]) -> GitHubProfile:
        resp = await client.get("user", token=token)
        resp.raise_for_status()
        data = resp.json()

        emails: List[str] = []
        emails_resp = await client.get("user/emails", token=token)
        if emails_resp.status_code == 200:
            emails = github_emails(emails_resp.json())
        else:
            logger.info("GitHub user/emails returned %d", emails_resp.status_code)
        if not emails and data.get("email"):
            emails = [str(data["email"])]

        return GitHubProfile(
            username=data.get("login"),
            display_name=data.get("name"),
            emails=emails,
        )


oauth_service = OAuthService()
