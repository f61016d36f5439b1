"""
Notekeeper Backend — Pydantic Request/Response Schemas (notes)
================================================================

What:  Pydantic models defining the API contract for notes.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies and serialize responses.

Design Decision:
    Request fields are all optional at the schema level. Content rules
    (required, minimum length) belong to NoteService so that a missing
    `content` produces the same "Note validation failed" 400 response as a
    too-short one, rather than FastAPI's generic 422.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from app.models.note import Note


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes.

    Unknown fields (such as a `user` owner id) are accepted and dropped;
    the owner always comes from the bearer token.
    """
    content: Optional[str] = Field(default=None, description="Note body, at least 5 characters")
    important: Optional[bool] = Field(default=None, description="Defaults to false")


class NoteUpdate(BaseModel):
    """Body of PUT /api/notes/{id}. Omitted fields keep their stored value."""
    content: Optional[str] = Field(default=None, description="Replacement content")
    important: Optional[bool] = Field(default=None, description="Replacement importance flag")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Public representation of a note.

    `id` and `user` are plain strings; the internal UUID type and any
    row metadata never leave the service.
    """
    id: str = Field(description="Note identifier")
    content: str = Field(description="Note body")
    date: datetime = Field(description="Creation timestamp (UTC)")
    important: bool = Field(description="Importance flag")
    user: str = Field(description="Owner user id")

    @classmethod
    def from_model(cls, note: Note) -> "NoteResponse":
        date = note.date
        if date is not None and date.tzinfo is None:
            # SQLite hands back naive values; stored timestamps are UTC
            date = date.replace(tzinfo=timezone.utc)
        return cls(
            id=str(note.id),
            content=note.content,
            date=date,
            important=note.important,
            user=str(note.user_id),
        )


class NoteSummary(BaseModel):
    """Compact note shape embedded in user listings."""
    id: str
    content: str
    important: bool


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Note validation failed: content is required",
            "details": {"field": "content"},
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
