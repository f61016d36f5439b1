"""
Notekeeper Backend — Pydantic Schemas (users and authentication)
==================================================================

What:  Request/response contracts for signup, login and user listing, plus
       the Identity value decoded from a bearer token.
Why:   Keeps password hashes out of every response model by construction.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.user import User
from app.schemas.note import NoteSummary


class UserCreate(BaseModel):
    """
    Body of POST /api/users.

    Length rules are checked by UserService so every failure maps to a 400
    with a readable message.
    """
    username: Optional[str] = Field(default=None, description="Unique login name")
    name: Optional[str] = Field(default=None, description="Display name")
    password: Optional[str] = Field(default=None, description="Plain password, hashed before storage")


class UserResponse(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    notes: List[NoteSummary] = Field(default_factory=list)

    @classmethod
    def from_model(cls, user: User, include_notes: bool = True) -> "UserResponse":
        notes = []
        if include_notes:
            notes = [
                NoteSummary(id=str(n.id), content=n.content, important=n.important)
                for n in user.notes
            ]
        return cls(id=str(user.id), username=user.username, name=user.name, notes=notes)


class LoginRequest(BaseModel):
    username: str = Field(default="", description="Login name")
    password: str = Field(default="", description="Plain password")


class LoginResponse(BaseModel):
    """Returned by POST /api/login; the client keeps it as its session."""
    token: str = Field(description="Bearer token for authenticated calls")
    username: str
    name: Optional[str] = None


class Identity(BaseModel):
    """Caller identity embedded in a verified bearer token."""
    user_id: uuid.UUID
    username: str

    model_config = {"frozen": True}
