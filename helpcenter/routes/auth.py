"""
Help Center Backend — Authentication Routes
=============================================

What:  Google/GitHub login, the current-user endpoint and logout.

Flow:
    GET /auth/{provider}            → 302 to the provider (state kept in the
                                      SessionMiddleware cookie)
    GET /auth/{provider}/callback   → profile → adapter → identity resolution
                                      → session token cookie → 302 to
                                      LOGIN_SUCCESS_REDIRECT
    any failure on that path        → 302 to LOGIN_FAILURE_REDIRECT

OAuth failures are only ever visible as that redirect, never as a JSON error
or a 500.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.config import settings
from helpcenter.database import get_db_session
from helpcenter.exceptions import AuthenticationRequiredError, DatabaseError, UpstreamAuthError
from helpcenter.messages import msg
from helpcenter.models.user import User
from helpcenter.schemas.common import ErrorResponse, MessageResponse
from helpcenter.schemas.user import UserResponse
from helpcenter.services.identity_service import identity_service
from helpcenter.services.oauth_service import Provider, oauth_service
from helpcenter.services.provider_adapters import normalize_profile
from helpcenter.services.session_service import session_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


# ── Session principal dependencies ────────────────────────────────────────

async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[User]:
    """
    Resolve the session cookie into the logged-in User (None if anonymous).

    The user is also attached to `request.state.user` for downstream code.
    """
    user = await session_service.resolve(db, request.cookies.get(settings.session_cookie_name))
    request.state.user = user
    return user


async def require_current_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise AuthenticationRequiredError()
    return user


def _callback_url(request: Request, provider: Provider) -> str:
    if settings.oauth_redirect_base_url:
        return f"{settings.oauth_redirect_base_url.rstrip('/')}/auth/{provider.value}/callback"
    return str(request.url_for("oauth_callback", provider=provider.value))


def _login_failed() -> RedirectResponse:
    return RedirectResponse(settings.login_failure_redirect, status_code=302)


# ── Routes ────────────────────────────────────────────────────────────────
# /auth/me must be declared before /auth/{provider} so it is not taken for a
# provider name.

@router.get(
    "/auth/me",
    response_model=UserResponse,
    responses={401: {"description": "Not logged in", "model": ErrorResponse}},
    summary="Current session user",
)
async def current_user(user: User = Depends(require_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.post(
    "/auth/logout",
    response_model=MessageResponse,
    summary="End the current session",
)
async def logout(request: Request) -> JSONResponse:
    await session_service.logout(request.cookies.get(settings.session_cookie_name))
    request.session.clear()
    response = JSONResponse(content={"message": msg("logged_out")})
    response.delete_cookie(**session_service.clear_cookie_kwargs())
    return response


@router.get(
    "/auth/{provider}",
    name="oauth_login",
    status_code=302,
    summary="Start Google or GitHub login",
)
async def oauth_login(provider: Provider, request: Request) -> RedirectResponse:
    try:
        return await oauth_service.authorize_redirect(
            provider, request, _callback_url(request, provider)
        )
    except UpstreamAuthError as e:
        logger.warning("%s login not started: %s | Context: %s", provider.value, e.message, e.context)
        return _login_failed()


@router.get(
    "/auth/{provider}/callback",
    name="oauth_callback",
    status_code=302,
    summary="Provider redirect target",
)
async def oauth_callback(
    provider: Provider,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """
    Complete the login.

    MissingEmailError (a GitHub account hiding its email) is raised by the
    adapter before identity resolution, so no statement reaches the store.
    Store errors during identity resolution also end as a failed login.
    """
    try:
        profile = await oauth_service.fetch_profile(provider, request)
        identity = normalize_profile(profile)
        user = await identity_service.resolve_or_create_user(db, identity.name, identity.email)
    except (UpstreamAuthError, DatabaseError) as e:
        logger.warning("%s login failed: %s | Context: %s", provider.value, e.message, e.context)
        return _login_failed()

    # A fresh token on every login; any previous one for this browser is dropped.
    await session_service.logout(request.cookies.get(settings.session_cookie_name))
    cookie_value = await session_service.login(user)

    logger.info("User %s logged in via %s", user.user_id, provider.value)
    response = RedirectResponse(settings.login_success_redirect, status_code=302)
    response.set_cookie(**session_service.cookie_kwargs(cookie_value))
    return response
