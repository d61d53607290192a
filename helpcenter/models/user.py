"""
Help Center Backend — User Model
==================================

What:  ORM model for the `Users` table.
Who:   IdentityService (OAuth find-or-create), UserService (registration and
       profile updates), SessionPrincipalService (deserialize by id).

Table Design:
    - user_id: store-assigned integer; the only thing kept in a session
    - email: UNIQUE natural key. Both OAuth providers and manual registration
      resolve identities by email, so the same person arriving through Google
      and later GitHub maps to one row.
    - phone: optional, only set through profile updates

    Email comparison follows the column collation. PostgreSQL's default
    collation is case-sensitive; the application does not normalize case.

    Rows are never deleted by this service.
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from helpcenter.database import Base


class User(Base):
    """A registered person (manual registration or first OAuth login)."""

    __tablename__ = "Users"

    user_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name (provider display name or username on OAuth signup)",
    )

    # unique=True creates the constraint whose violation surfaces as
    # ConflictError (HTTP 409).
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Unique natural key for identity resolution",
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        default=None,
        comment="Optional contact phone",
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email='{self.email}')>"
