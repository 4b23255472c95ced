"""
ProjectHub Backend — User and ActiveToken SQLAlchemy Models
=============================================================

What:  ORM models for the `users` and `active_tokens` tables.
Who:   Used by the user/token repositories and by Alembic.

Table Design:
    - users.sub: the identity provider's stable subject; unique, indexed,
      because login looks users up by it
    - users.last_login: refreshed on every login and every PUT
    - active_tokens.ttl_seconds: lifetime counted from creation_date
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from projecthub.database import Base

DEFAULT_TOKEN_TTL_SECONDS = 3600


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class User(Base):
    """
    An account created from a Google login (or POST /users).

    Lifecycle:
        1. Created on first login, keyed by `sub`
        2. Profile fields and last_login refreshed on later logins
        3. Removed by DELETE /users/{id}; tokens and projects cascade
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sub: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Subject identifier issued by the identity provider",
    )

    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    picture: Mapped[str] = mapped_column(String(1024), nullable=False)

    last_login: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, sub='{self.sub}', email='{self.email}')>"


class ActiveToken(Base):
    """A session token owned by a user, valid for `ttl_seconds` after creation."""

    __tablename__ = "active_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    ttl_seconds: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_TOKEN_TTL_SECONDS,
        server_default=text(str(DEFAULT_TOKEN_TTL_SECONDS)),
    )

    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """True while `now - creation_date < ttl_seconds`."""
        now = as_utc(now or utcnow())
        return now - as_utc(self.creation_date) < timedelta(seconds=self.ttl_seconds)

    def __repr__(self) -> str:
        return f"<ActiveToken(id={self.id}, user_id={self.user_id}, ttl={self.ttl_seconds})>"
