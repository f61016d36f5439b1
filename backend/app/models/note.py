"""
Notekeeper Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key, exposed publicly as the string `id`
    - content: TEXT, at least 5 characters (enforced by NoteService)
    - date: creation time, UTC, set by the server
    - important: defaults to false when the client omits it
    - user_id: owner, required; assigned from the caller's token, never
      from the request payload
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


# Shortest content a note may hold
NOTE_CONTENT_MIN_LENGTH = 5


class Note(Base):
    """
    A single note owned by exactly one user.

    Lifecycle:
        absent → present   create (owner fixed here, never changes)
        present → present  update (content / important only)
        present → absent   delete
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Public note identifier",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body, at least 5 characters",
    )

    # Why timezone-aware: all storage in UTC; clients convert for display
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    important: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        comment="Importance flag toggled from the client",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner; taken from the authenticated caller at creation",
    )

    user: Mapped["User"] = relationship(back_populates="notes")  # noqa: F821

    __table_args__ = (
        Index("idx_notes_date", "date"),
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id={self.user_id}, important={self.important})>"
