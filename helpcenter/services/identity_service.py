"""
Help Center Backend — Identity Resolution
===========================================

What:  Find-or-create of a User keyed on email, used by both OAuth callbacks.
Who:   routes/auth.py, after the provider adapter produced (name, email).

Algorithm:
    1. SELECT the user by email.
    2. Found → return it untouched. A repeat OAuth login never overwrites a
       name or phone the user edited through PUT /api/users/{id}.
    3. Missing → INSERT (name, email) and COMMIT; the flush yields only the
       generated id, so the canonical row (with store defaults) is re-read by
       that id. The row is committed before the caller issues a session
       cookie for it.

Limitation:
    The returned User looks the same whether it pre-existed or was just
    created. Callers that need to tell the two apart (welcome email, first-run
    onboarding) need an extended contract.

Errors:
    Any SQLAlchemy error rolls the session back and becomes DatabaseError. The
    callback treats it as a failed login, not a server crash.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.exceptions import DatabaseError
from helpcenter.models.user import User

logger = logging.getLogger(__name__)


class IdentityService:
    """Stateless; every call receives the request-scoped session."""

    async def find_by_email(self, db: AsyncSession, email: str) -> User | None:
        # `=` comparison: case-sensitivity is whatever the Users.email
        # collation says.
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def resolve_or_create_user(self, db: AsyncSession, name: str, email: str) -> User:
        """
        Return the user owning `email`, creating the row on first sight.

        Args:
            db: Request-scoped session
            name: Display name to use only if the user is created
            email: Natural key

        Raises:
            DatabaseError: lookup, insert or re-read failed
        """
        try:
            existing = await self.find_by_email(db, email)
            if existing is not None:
                logger.info("Identity resolved to existing user %s", existing.user_id)
                return existing

            new_user = User(name=name, email=email)
            db.add(new_user)
            await db.flush()
            new_id = new_user.user_id
            await db.commit()

            result = await db.execute(
                select(User)
                .where(User.user_id == new_id)
                .execution_options(populate_existing=True)
            )
            user = result.scalar_one()
            logger.info("Created user %s from OAuth login", user.user_id)
            return user

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Identity resolution failed: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})


identity_service = IdentityService()
