"""
Help Center Backend — OAuth Provider Profile Adapters
=======================================================

What:  Normalizes each provider's profile into one ProviderIdentity(name, email).
Why:   Google and GitHub describe a user differently. Identity resolution should
       only ever see the canonical pair, so the provider-specific rules live
       here, at the boundary.
How:   Profiles are a tagged variant (GoogleProfile | GitHubProfile) built by
       OAuthService from the provider responses; `normalize_profile` dispatches
       on the tag.

Rules:
    Google  name = display name, email = first address
    GitHub  name = display name, falling back to the username;
            email = first address, MissingEmailError when there is none

Adapters do no I/O. MissingEmailError is raised here, before the callback
ever opens a store session.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from helpcenter.exceptions import MissingEmailError


@dataclass(frozen=True)
class GoogleProfile:
    display_name: Optional[str]
    emails: List[str] = field(default_factory=list)

    provider = "google"


@dataclass(frozen=True)
class GitHubProfile:
    username: Optional[str]
    display_name: Optional[str]
    emails: List[str] = field(default_factory=list)

    provider = "github"


ProviderProfile = Union[GoogleProfile, GitHubProfile]


@dataclass(frozen=True)
class ProviderIdentity:
    """The canonical (name, email) pair handed to identity resolution."""
    name: str
    email: str
    provider: str


def _first_email(emails: List[str]) -> Optional[str]:
    for email in emails:
        if email and email.strip():
            return email.strip()
    return None


def normalize_google(profile: GoogleProfile) -> ProviderIdentity:
    email = _first_email(profile.emails)
    if email is None:
        # Google always includes an email for the `email` scope; an empty list
        # means the consent screen was tampered with.
        raise MissingEmailError("google")
    return ProviderIdentity(
        name=profile.display_name or email,
        email=email,
        provider=profile.provider,
    )


def normalize_github(profile: GitHubProfile) -> ProviderIdentity:
    email = _first_email(profile.emails)
    if email is None:
        raise MissingEmailError("github", context={"username": profile.username})
    return ProviderIdentity(
        name=profile.display_name or profile.username or email,
        email=email,
        provider=profile.provider,
    )


def normalize_profile(profile: ProviderProfile) -> ProviderIdentity:
    """
    Reduce a provider profile to ProviderIdentity.

    Raises:
        MissingEmailError: the profile carries no email address
        TypeError: unknown profile type (programming error)
    """
    if isinstance(profile, GoogleProfile):
        return normalize_google(profile)
    if isinstance(profile, GitHubProfile):
        return normalize_github(profile)
    raise TypeError(f"Unsupported provider profile: {type(profile).__name__}")
