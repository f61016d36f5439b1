"""
Notekeeper Backend — Authentication Service (Token Issuer)
============================================================

What:  Password hashing, login, and bearer token issue/verification.
Why:   Keeps every credential concern behind one small interface so routes
       and NoteService only ever see an `Identity`.
How:   passlib's bcrypt context for the one-way hash; python-jose for HS256
       signed tokens carrying {username, id}.

Token Lifetime:
    Tokens carry no `exp` claim and are never stored server-side. A token is
    valid for as long as the signing key is unchanged. This is a known
    limitation: rotate SECRET_KEY to revoke every outstanding token.
"""

import logging
import uuid
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import (
    DatabaseError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
)
from app.models.user import User
from app.schemas.user import Identity, LoginResponse

logger = logging.getLogger(__name__)

# bcrypt is deliberately slow; hashing runs in the threadpool so the event
# loop keeps serving other requests meanwhile
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class AuthService:
    """
    Issues and verifies bearer tokens.

    Responsibilities:
        - hash_password(): one-way hash for storage at signup
        - issue_token(): username/password login → signed token
        - verify_token(): signed token → Identity
    """

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(pwd_context.hash, password)

    async def verify_password(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(pwd_context.verify, password, password_hash)

    def create_token(self, user: User) -> str:
        """Sign a token for `user`. No expiry claim is added."""
        claims = {"username": user.username, "id": str(user.id)}
        return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)

    async def issue_token(
        self,
        db: AsyncSession,
        username: str,
        password: str,
    ) -> LoginResponse:
        """
        Log a user in.

        Looks the user up by username and checks the password against the
        stored hash. Unknown user and wrong password fail identically.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password (→ 401)
            DatabaseError: Lookup failed (→ 500)
        """
        try:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login lookup: %s", str(e))
            raise DatabaseError(
                message="Could not log in. Please try again.",
                context={"error_type": type(e).__name__},
            )

        password_ok = False
        if user is not None and password:
            try:
                password_ok = await self.verify_password(password, user.password_hash)
            except ValueError:
                # passlib refuses some inputs (NUL bytes) instead of returning False
                password_ok = False

        if not password_ok:
            logger.warning("Failed login attempt for username '%s'", username)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return LoginResponse(
            token=self.create_token(user),
            username=user.username,
            name=user.name,
        )

    def verify_token(self, token: Optional[str]) -> Identity:
        """
        Decode a bearer token into the caller's Identity.

        Raises:
            UnauthorizedError: No token supplied
            InvalidTokenError: Bad signature, or claims without a usable id
        """
        if not token:
            raise UnauthorizedError()

        try:
            claims = jwt.decode(
                token,
                settings.secret_key,
                algorithms=[settings.jwt_algorithm],
            )
        except JWTError as e:
            raise InvalidTokenError(context={"reason": str(e)})

        raw_id = claims.get("id")
        if not raw_id:
            raise InvalidTokenError()
        try:
            user_id = uuid.UUID(str(raw_id))
        except ValueError:
            raise InvalidTokenError(context={"reason": "id claim is not a UUID"})

        return Identity(user_id=user_id, username=claims.get("username", ""))


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
