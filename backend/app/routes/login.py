"""
Notekeeper Backend — Login Route Handler
==========================================

What:  POST /api/login exchanges a username/password for a bearer token.
Why:   JSON body (not an OAuth2 form) because the web client posts the same
       {username, password} object it collects from its login form.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.note import ErrorResponse
from app.schemas.user import LoginRequest, LoginResponse
from app.services.auth_service import auth_service

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid username or password", "model": ErrorResponse}},
    summary="Log in and receive a bearer token",
)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await auth_service.issue_token(db, credentials.username, credentials.password)
