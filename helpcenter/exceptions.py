"""
Help Center Backend — Custom Exception Hierarchy
==================================================

What:  Application exceptions, one per failure class the API distinguishes.
How:   Each exception carries a user-facing `message` and a `context` dict that
       is logged but never returned. Handlers in main.py are the single place
       that turns these into HTTP responses.

Exception Hierarchy:
    HelpCenterError (base)
    ├── ValidationError               → 400 Bad Request
    ├── AuthenticationRequiredError   → 401 Unauthorized
    ├── NotFoundError                 → 404 Not Found
    ├── ConflictError                 → 409 Conflict (duplicate email)
    ├── UpstreamAuthError             → 302 to the login failure page
    │   └── MissingEmailError         (provider returned no email)
    └── DatabaseError                 → 500 Internal Server Error

Store errors are never retried: services translate SQLAlchemy errors into
DatabaseError/ConflictError once and let them propagate.
"""

from typing import Any, Dict, List, Optional

from helpcenter.messages import msg


class HelpCenterError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing description (safe to return in API response)
        context:  Debug info (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or msg("internal_error")
        self.context = dict(context or {})
        super().__init__(self.message)


class ValidationError(HelpCenterError):
    """
    Raised when a required field is missing or the body is malformed.

    HTTP: 400 Bad Request. `fields` lists the missing field names and is
    returned as `details` so the frontend can highlight them.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message or msg("invalid_request"), context=ctx)
        self.fields = list(fields or [])


def missing_fields(**values: Optional[str]) -> List[str]:
    """Names of the given fields that are None or blank, for ValidationError."""
    return [name for name, value in values.items() if value is None or not str(value).strip()]


class AuthenticationRequiredError(HelpCenterError):
    """No valid session principal on a request that needs one. HTTP 401."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=msg("auth_required"), context=context)


class NotFoundError(HelpCenterError):
    """
    Raised when no row exists for the requested key.

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so routes stay free of status-code logic.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(HelpCenterError):
    """
    Raised on a unique-constraint violation.

    The only unique business key is Users.email, so in practice this means
    "email already registered". HTTP 409.
    """


class UpstreamAuthError(HelpCenterError):
    """
    The OAuth provider round trip did not yield a usable identity.

    Covers denied consent, state mismatch, token exchange failures, provider
    HTTP errors and store failures during login. Never rendered as JSON: the
    callback answers with a redirect to LOGIN_FAILURE_REDIRECT.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        provider: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if provider:
            ctx["provider"] = provider
        super().__init__(message=message, context=ctx)
        self.provider = provider


class MissingEmailError(UpstreamAuthError):
    """
    The provider profile carries no email address.

    GitHub withholds email depending on account privacy settings. Raised by
    the provider adapter before any store access happens.
    """

    def __init__(self, provider: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=msg(f"{provider}_missing_email"),
            provider=provider,
            context=context,
        )


class DatabaseError(HelpCenterError):
    """
    Raised when a store operation fails unexpectedly.

    The client only ever sees the generic message; driver errors, SQL and
    constraint names stay in the server log.
    """
