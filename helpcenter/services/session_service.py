"""
Help Center Backend — Session Principal Management
====================================================

What:  Keeps "who is logged in" between requests.
How:   A server-issued random token maps to a user id in a SessionStore. The
       browser holds the token in a cookie signed with itsdangerous, so a
       forged or truncated cookie is rejected before the store is consulted.
       Only the user id is stored; each request that needs identity re-reads
       the full User row (deserialize).

Session states:
    anonymous ──GET /auth/{provider}──▶ pending (OAuth state in SessionMiddleware)
    pending ──callback ok, login()──▶ authenticated
    pending ──provider failure──▶ anonymous (redirect to login page)
    authenticated ──logout() or user row gone──▶ anonymous

SessionStore is an explicit {get, set, destroy} interface, independent of
Starlette's session machinery, so a shared backend (Redis, a table) can
replace InMemorySessionStore without touching callers.
"""

import logging
import secrets
import time
from typing import Dict, Optional, Protocol, Tuple

from itsdangerous import BadSignature, URLSafeTimedSerializer
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.config import settings
from helpcenter.exceptions import DatabaseError
from helpcenter.models.user import User

logger = logging.getLogger(__name__)

SESSION_SALT = "helpcenter-session-v1"


class SessionStore(Protocol):
    """Opaque session token → user id."""

    async def get(self, token: str) -> Optional[int]:
        ...

    async def set(self, token: str, user_id: int) -> None:
        ...

    async def destroy(self, token: str) -> None:
        ...


class InMemorySessionStore:
    """
    Process-local SessionStore with a fixed time-to-live.

    Sessions do not survive a restart and are not shared between workers;
    run a single worker or plug in a shared store.

    Expired entries are dropped when looked up, and `set()` sweeps the whole
    map at most once per `sweep_interval` seconds so abandoned sessions do not
    accumulate.
    """

    def __init__(self, ttl_seconds: int, sweep_interval: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self.sweep_interval = sweep_interval
        self._entries: Dict[str, Tuple[int, float]] = {}
        self._last_sweep = time.monotonic()

    async def get(self, token: str) -> Optional[int]:
        entry = self._entries.get(token)
        if entry is None:
            return None
        user_id, expires_at = entry
        if expires_at <= time.monotonic():
            del self._entries[token]
            return None
        return user_id

    async def set(self, token: str, user_id: int) -> None:
        now = time.monotonic()
        if now - self._last_sweep >= self.sweep_interval:
            self._sweep_expired(now)
        self._entries[token] = (user_id, now + self.ttl_seconds)

    async def destroy(self, token: str) -> None:
        self._entries.pop(token, None)

    def __len__(self) -> int:
        return len(self._entries)

    def _sweep_expired(self, now: float) -> None:
        expired = [token for token, (_, expires_at) in self._entries.items() if expires_at <= now]
        for token in expired:
            del self._entries[token]
        self._last_sweep = now

        if expired:
            logger.debug("Dropped %d expired sessions", len(expired))


class SessionPrincipalService:
    """
    serialize/deserialize pair plus the cookie-level login/resolve/logout.

    Attributes:
        store: where token → user id lives
        max_age: signature lifetime in seconds (matches the cookie max-age)
    """

    def __init__(self, store: SessionStore, secret: str, max_age: int):
        self.store = store
        self.max_age = max_age
        self._signer = URLSafeTimedSerializer(secret_key=secret, salt=SESSION_SALT)

    # ── serialize / deserialize ───────────────────────────────────────────

    def serialize(self, user: User) -> int:
        """Reduce a user to the value kept in the session: its id."""
        return user.user_id

    async def deserialize(self, db: AsyncSession, user_id: int) -> Optional[User]:
        """
        Re-fetch the full user row for a stored id.

        Returns None, not an error, when the row no longer exists.

        Raises:
            DatabaseError: the lookup itself failed
        """
        try:
            result = await db.execute(select(User).where(User.user_id == user_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Session deserialize failed for user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id, "error_type": type(e).__name__})

    # ── cookie lifecycle ──────────────────────────────────────────────────

    async def login(self, user: User) -> str:
        """Issue a new session for `user` and return the signed cookie value."""
        token = secrets.token_urlsafe(32)
        await self.store.set(token, self.serialize(user))
        return self._signer.dumps(token)

    def _unsign(self, cookie_value: Optional[str]) -> Optional[str]:
        if not cookie_value:
            return None
        try:
            token = self._signer.loads(cookie_value, max_age=self.max_age)
        except BadSignature:
            # BadTimeSignature / SignatureExpired are subclasses
            return None
        return token if isinstance(token, str) else None

    async def resolve(self, db: AsyncSession, cookie_value: Optional[str]) -> Optional[User]:
        """
        Turn a session cookie into the logged-in User, or None for anonymous.

        A token whose user has disappeared is destroyed so the next request
        does not hit the store for it again.
        """
        token = self._unsign(cookie_value)
        if token is None:
            return None

        user_id = await self.store.get(token)
        if user_id is None:
            return None

        user = await self.deserialize(db, user_id)
        if user is None:
            logger.info("Session for missing user %s invalidated", user_id)
            await self.store.destroy(token)
        return user

    async def logout(self, cookie_value: Optional[str]) -> None:
        token = self._unsign(cookie_value)
        if token is not None:
            await self.store.destroy(token)

    # ── cookie attributes ─────────────────────────────────────────────────

    def cookie_kwargs(self, value: str) -> dict:
        return {
            "key": settings.session_cookie_name,
            "value": value,
            "max_age": self.max_age,
            "httponly": True,
            "secure": settings.cookie_secure,
            "samesite": "lax",
            "path": "/",
        }

    def clear_cookie_kwargs(self) -> dict:
        return {
            "key": settings.session_cookie_name,
            "httponly": True,
            "secure": settings.cookie_secure,
            "samesite": "lax",
            "path": "/",
        }


session_service = SessionPrincipalService(
    store=InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds),
    secret=settings.session_secret,
    max_age=settings.session_ttl_seconds,
)
