"""
ProjectHub Backend — User and ActiveToken Repositories
========================================================

What:  Persistence for accounts and their session tokens.
Who:   /users and /user_tokens route handlers, and the Google login callback.

Users are keyed by the identity provider's subject (`sub`):
create_or_update() inserts a new account the first time a subject is seen
and refreshes the profile fields and last_login on every later call.
"""

import logging
from typing import TYPE_CHECKING, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.exceptions import DatabaseError
from projecthub.models.user import DEFAULT_TOKEN_TTL_SECONDS, ActiveToken, User, utcnow
from projecthub.repositories.base import FilterField, Repository

if TYPE_CHECKING:
    from projecthub.services.auth_service import IdentityProfile

logger = logging.getLogger(__name__)


class UserRepository(Repository[User]):
    model = User
    resource = "user"
    sort_fields = {
        "UserID": "id",
        "name": "name",
        "email": "email",
        "lastLogin": "last_login",
    }

    async def find_by_subject(self, db: AsyncSession, sub: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.sub == sub))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error fetching user with subject %s: %s", sub, str(e))
            return None

    async def create_or_update(
        self,
        db: AsyncSession,
        sub: str,
        email: str,
        name: str,
        picture: str,
    ) -> User:
        """
        Upsert keyed on `sub`.

        Unlike find_by_subject, a failed lookup here is a write failure:
        silently inserting a duplicate subject would be worse than a 500.

        Raises:
            DatabaseError: the store rejected the lookup or the write
        """
        try:
            result = await db.execute(select(User).where(User.sub == sub))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error looking up user with subject %s: %s", sub, str(e))
            raise DatabaseError(context={"sub": sub, "original_error": type(e).__name__})

        if user is None:
            return await self.create(
                db, sub=sub, email=email, name=name, picture=picture, last_login=utcnow()
            )

        await self.update(
            db,
            user,
            {"email": email, "name": name, "picture": picture, "last_login": utcnow()},
        )
        return user

    async def find_or_create_by_subject(
        self, db: AsyncSession, subject: str, profile: "IdentityProfile"
    ) -> User:
        """Resolve a verified identity to a persisted account."""
        return await self.create_or_update(
            db,
            sub=subject,
            email=profile.email,
            name=profile.name,
            picture=profile.picture_url,
        )


class ActiveTokenRepository(Repository[ActiveToken]):
    model = ActiveToken
    resource = "token"
    sort_fields = {
        "TokenID": "id",
        "CreationDate": "creation_date",
    }
    filter_fields = {
        "UserID": FilterField("user_id"),
    }

    async def issue(
        self, db: AsyncSession, user_id: int, ttl_seconds: Optional[int] = None
    ) -> ActiveToken:
        return await self.create(
            db,
            user_id=user_id,
            ttl_seconds=ttl_seconds or DEFAULT_TOKEN_TTL_SECONDS,
            creation_date=utcnow(),
        )


user_repository = UserRepository()
token_repository = ActiveTokenRepository()
