"""
Notekeeper Backend — User Route Handlers
==========================================

What:  Signup (POST /api/users) and user listing (GET /api/users).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.note import ErrorResponse
from app.schemas.user import UserCreate, UserResponse
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Duplicate username or invalid fields", "model": ErrorResponse},
    },
    summary="Create a user account",
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(
        db,
        username=payload.username,
        name=payload.name,
        password=payload.password,
    )


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users with their notes",
)
async def list_users(
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await user_service.list_users(db)
