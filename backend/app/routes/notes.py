"""
Notekeeper Backend — Notes Route Handlers
===========================================

What:  CRUD endpoints for notes under /api/notes.
How:   Extracts path/body/auth, delegates to NoteService, returns JSON.
Who:   Called by the web client through app.client.NotesClient.

Auth:
    POST and DELETE depend on get_current_identity (401 without a valid
    bearer token). GET and PUT are open.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.routes.dependencies import get_current_identity
from app.schemas.note import ErrorResponse, NoteCreate, NoteResponse, NoteUpdate
from app.schemas.user import Identity
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    summary="List all notes",
    description="Returns every note, regardless of owner, oldest first.",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Get one note.

    `note_id` is taken as a plain string and parsed by the service, so a
    malformed id yields our 400 `malformatted_id` instead of FastAPI's 422.
    """
    return await note_service.get_note(db, note_id)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Content missing or too short", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Create a note owned by the caller",
)
async def create_note(
    payload: NoteCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db, identity, payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed id or invalid content", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace a note's content and/or importance",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    # TODO: require a token and owner match once product confirms the intended rule
    return await note_service.update_note(db, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Malformed note id", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Delete a note",
    description="Deleting an id that has no note still returns 204.",
)
async def delete_note(
    note_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, identity, note_id)
    return Response(status_code=204)
