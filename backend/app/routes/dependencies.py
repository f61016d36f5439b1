"""
Notekeeper Backend — Shared Route Dependencies
================================================

What:  FastAPI dependency that turns the Authorization header into an Identity.
How:   HTTPBearer extracts the token (scheme matched case-insensitively, so the
       `bearer <token>` form sent by the web client works); AuthService
       verifies it.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.schemas.user import Identity
from app.services.auth_service import auth_service

# auto_error=False: a missing header must produce our own 401 body
bearer_scheme = HTTPBearer(auto_error=False, description="Token from POST /api/login")


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Require a valid bearer token.

    Raises UnauthorizedError (no token) or InvalidTokenError (bad token),
    both rendered as 401 by the global handlers.
    """
    token = credentials.credentials if credentials else None
    return auth_service.verify_token(token)
