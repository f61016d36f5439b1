"""
Notekeeper Backend — User Service (Credential Store)
======================================================

What:  Signup and user listing.
Why:   Validation and uniqueness rules for accounts live here, independent
       of HTTP.
How:   Checks the username up front for a friendly error, then relies on the
       UNIQUE constraint to catch a concurrent signup that slipped past the
       check. Both paths raise the same DuplicateUsernameError.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.exceptions import DatabaseError, DuplicateUsernameError, ValidationError
from app.models.user import (
    NAME_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    User,
)
from app.schemas.user import UserResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for user accounts."""

    def _validate(
        self,
        username: Optional[str],
        name: Optional[str],
        password: Optional[str],
    ) -> None:
        if not username:
            raise ValidationError(
                message="User validation failed: username is required",
                field="username",
            )
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(
                message=(
                    "User validation failed: username must be at least "
                    f"{USERNAME_MIN_LENGTH} characters long"
                ),
                field="username",
            )
        if len(username) > USERNAME_MAX_LENGTH:
            raise ValidationError(
                message=(
                    "User validation failed: username must be at most "
                    f"{USERNAME_MAX_LENGTH} characters long"
                ),
                field="username",
            )
        if name is not None and len(name) > NAME_MAX_LENGTH:
            raise ValidationError(
                message=(
                    "User validation failed: name must be at most "
                    f"{NAME_MAX_LENGTH} characters long"
                ),
                field="name",
            )
        if not password or len(password) < settings.password_min_length:
            raise ValidationError(
                message=(
                    "User validation failed: password must be at least "
                    f"{settings.password_min_length} characters long"
                ),
                field="password",
            )
        # bcrypt rejects NUL bytes outright
        if "\x00" in password:
            raise ValidationError(
                message="User validation failed: password must not contain NUL characters",
                field="password",
            )

    async def create_user(
        self,
        db: AsyncSession,
        username: Optional[str],
        name: Optional[str],
        password: Optional[str],
    ) -> UserResponse:
        """
        Register a new user.

        Raises:
            ValidationError: Username missing or out of range, name too long,
                or password short or containing NUL (→ 400)
            DuplicateUsernameError: Username already taken (→ 400)
            DatabaseError: Insert failed for another reason (→ 500)
        """
        self._validate(username, name, password)

        try:
            existing = await db.execute(select(User.id).where(User.username == username))
            if existing.scalar_one_or_none() is not None:
                raise DuplicateUsernameError(username)

            user = User(
                username=username,
                name=name,
                password_hash=await auth_service.hash_password(password),
                notes=[],
            )
            db.add(user)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same name
            raise DuplicateUsernameError(username)
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User created: %s (%s)", user.id, user.username)
        return UserResponse.from_model(user)

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        """All users with a summary of the notes each one owns."""
        try:
            result = await db.execute(
                select(User).options(selectinload(User.notes)).order_by(User.username)
            )
            users = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [UserResponse.from_model(u) for u in users]


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
