"""
Notekeeper Backend — Note Service (Access-Controlled Note API)
================================================================

What:  The note lifecycle: list, get, create, update, delete.
Why:   Encapsulates ownership and validation rules in one place, independent
       of HTTP concerns.
How:   Each operation is a single statement against the notes table inside
       the request's session. Callers pass the decoded Identity where an
       operation needs one.
Who:   Called by route handlers in app/routes/notes.py.

Access Rules:
    ┌──────────────┬───────────────┬──────────────────────────────────────┐
    │ Operation    │ Needs token   │ Notes                                │
    ├──────────────┼───────────────┼──────────────────────────────────────┤
    │ list_notes   │ no            │ every note, not filtered by owner    │
    │ get_note     │ no            │ 400 malformed id, 404 absent         │
    │ create_note  │ yes           │ owner = caller, payload owner ignored│
    │ update_note  │ no            │ no ownership check                   │
    │ delete_note  │ yes           │ absent id is not an error            │
    └──────────────┴───────────────┴──────────────────────────────────────┘

    update_note being open to anonymous callers, and delete_note not checking
    the owner, match how the service has always behaved. Both are tracked as
    open product questions and are not to be tightened here unilaterally.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    DatabaseError,
    InvalidIdError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.models.note import NOTE_CONTENT_MIN_LENGTH, Note
from app.models.user import User
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from app.schemas.user import Identity

logger = logging.getLogger(__name__)


def parse_note_id(raw_id: str) -> uuid.UUID:
    """
    Parse a path identifier.

    Raises:
        InvalidIdError: `raw_id` is not a well-formed UUID (→ 400, not 404)
    """
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        raise InvalidIdError(raw_id)


def validate_content(content: Optional[str]) -> str:
    if content is None:
        raise ValidationError(
            message="Note validation failed: content is required",
            field="content",
        )
    if len(content) < NOTE_CONTENT_MIN_LENGTH:
        raise ValidationError(
            message=(
                "Note validation failed: content is shorter than the minimum "
                f"allowed length ({NOTE_CONTENT_MIN_LENGTH})"
            ),
            field="content",
            context={"min_length": NOTE_CONTENT_MIN_LENGTH},
        )
    return content


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Rule violations raise application exceptions directly. Unexpected
        SQLAlchemy failures are wrapped in DatabaseError so no SQL detail
        reaches the client.
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """Every note, oldest first. Not filtered by owner."""
        try:
            result = await db.execute(select(Note).order_by(Note.date, Note.id))
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [NoteResponse.from_model(n) for n in notes]

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            InvalidIdError: Malformed id (→ 400)
            NotFoundError: No note with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        note = await self._load(db, parse_note_id(note_id))
        return NoteResponse.from_model(note)

    async def create_note(
        self,
        db: AsyncSession,
        identity: Optional[Identity],
        payload: NoteCreate,
    ) -> NoteResponse:
        """
        Create a note owned by the caller.

        The owner is always `identity.user_id`; whatever the client put in
        the body about ownership has already been dropped by NoteCreate.

        Raises:
            UnauthorizedError: No identity, or the identity's user is gone (→ 401)
            ValidationError: Content missing or shorter than 5 chars (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        if identity is None:
            raise UnauthorizedError()

        content = validate_content(payload.content)

        try:
            owner = await db.get(User, identity.user_id)
            if owner is None:
                raise UnauthorizedError(message="user not found")

            note = Note(
                content=content,
                important=bool(payload.important) if payload.important is not None else False,
                date=datetime.now(timezone.utc),
                user_id=owner.id,
            )
            db.add(note)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created by user %s", note.id, owner.id)
        return NoteResponse.from_model(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: str,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Replace the content and/or importance of an existing note.

        Omitted fields keep their stored value. A new content value must pass
        the same rule as at creation.

        Raises:
            InvalidIdError: Malformed id (→ 400)
            ValidationError: Replacement content too short (→ 400)
            NotFoundError: No note with that id (→ 404)
        """
        uid = parse_note_id(note_id)
        if payload.content is not None:
            validate_content(payload.content)

        note = await self._load(db, uid)

        if payload.content is not None:
            note.content = payload.content
        if payload.important is not None:
            note.important = payload.important

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", uid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(uid)},
            )

        logger.info("Note %s updated", uid)
        return NoteResponse.from_model(note)

    async def delete_note(
        self,
        db: AsyncSession,
        identity: Optional[Identity],
        note_id: str,
    ) -> None:
        """
        Remove a note by id.

        Idempotent: deleting an id with no note succeeds silently.

        Raises:
            UnauthorizedError: No identity (→ 401)
            InvalidIdError: Malformed id (→ 400)
        """
        if identity is None:
            raise UnauthorizedError()

        uid = parse_note_id(note_id)
        try:
            result = await db.execute(delete(Note).where(Note.id == uid))
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", uid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(uid)},
            )

        if result.rowcount:
            logger.info("Note %s deleted by user %s", uid, identity.user_id)
        else:
            logger.debug("Delete of absent note %s ignored", uid)

    async def _load(self, db: AsyncSession, uid: uuid.UUID) -> Note:
        try:
            note = await db.get(Note, uid)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", uid, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(uid)},
            )
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(uid))
        return note


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
