"""
Notekeeper Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table (the credential store).
Why:   Holds login credentials and owns notes.
How:   Only the bcrypt hash of the password is stored; the raw password
       never reaches this layer.

Uniqueness:
    `username` carries a UNIQUE constraint so the database rejects duplicates
    even when two signups for the same name race past the service-level check.
"""

import uuid
from typing import List, Optional

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 64
NAME_MAX_LENGTH = 128


class User(Base):
    """
    A registered user.

    Created via signup, never updated or deleted by the API.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH),
        nullable=False,
        unique=True,
        index=True,
        comment="Login name, unique across users",
    )

    # Display name; optional at signup
    name: Mapped[Optional[str]] = mapped_column(String(NAME_MAX_LENGTH), nullable=True)

    password_hash: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        comment="One-way hash of the password",
    )

    notes: Mapped[List["Note"]] = relationship(  # noqa: F821
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Note.date",
    )

    def __repr__(self) -> str:
        # password_hash deliberately left out
        return f"<User(id={self.id}, username='{self.username}')>"
