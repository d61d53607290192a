"""
Help Center Backend — User Service
====================================

What:  Manual registration, profile lookup and profile update.
Who:   routes/users.py.

Error mapping:
    blank/missing name or email  → ValidationError (400)
    unknown user_id              → NotFoundError (404)
    duplicate email (IntegrityError on Users.email) → ConflictError (409)
    any other SQLAlchemy error   → DatabaseError (500)

Each write issues a single statement and commits before returning, so the
row is durable before the route answers. The insert path flushes to learn the
generated id.
"""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
    missing_fields,
)
from helpcenter.messages import msg
from helpcenter.models.user import User

logger = logging.getLogger(__name__)


class UserService:

    async def create_user(self, db: AsyncSession, name: Optional[str], email: Optional[str]) -> int:
        """Insert a user and return the generated user_id."""
        missing = missing_fields(name=name, email=email)
        if missing:
            raise ValidationError(message=msg("user_missing_fields"), fields=missing)

        user = User(name=name, email=email)
        try:
            db.add(user)
            await db.flush()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.info("Registration rejected: email already present")
            raise ConflictError(message=msg("user_email_conflict"))
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to create user: %s", str(e), exc_info=True)
            raise DatabaseError(message=msg("user_failed"), context={"error_type": type(e).__name__})

        logger.info("User %s registered", user.user_id)
        return user.user_id

    async def get_user(self, db: AsyncSession, user_id: int) -> User:
        try:
            result = await db.execute(select(User).where(User.user_id == user_id))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(message=msg("user_failed"), context={"user_id": user_id})

        if user is None:
            raise NotFoundError(message=msg("user_not_found"), resource="user", resource_id=str(user_id))
        return user

    async def update_user(
        self,
        db: AsyncSession,
        user_id: int,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
    ) -> None:
        """
        Overwrite name, email and phone of an existing user.

        UPDATE ... WHERE user_id = :id, committed when a row matched; zero
        matched rows means the user does not exist.
        """
        missing = missing_fields(name=name, email=email)
        if missing:
            raise ValidationError(message=msg("user_missing_fields"), fields=missing)

        stmt = (
            update(User)
            .where(User.user_id == user_id)
            .values(name=name, email=email, phone=phone)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            updated = result.rowcount
            if updated:
                await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.info("Update of user %s rejected: email already present", user_id)
            raise ConflictError(message=msg("user_email_conflict"), context={"user_id": user_id})
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to update user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(message=msg("user_failed"), context={"user_id": user_id})

        if updated == 0:
            raise NotFoundError(message=msg("user_not_found"), resource="user", resource_id=str(user_id))
        logger.info("User %s updated", user_id)


user_service = UserService()
