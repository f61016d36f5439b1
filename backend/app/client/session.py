"""
Notekeeper Client — Session Credential
========================================

What:  The caller's login state, passed explicitly into authenticated calls.
Why:   Replaces a process-wide "current token" variable: two sessions (for
       example two users in one test, or one per browser tab in a server-side
       renderer) can coexist without stepping on each other.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class Session(BaseModel):
    """Login result held by the client for the lifetime of a login."""

    token: str
    username: str
    name: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_login(cls, body: Dict[str, Any]) -> "Session":
        """Build from the body returned by POST /api/login."""
        return cls(token=body["token"], username=body["username"], name=body.get("name"))

    def authorization_header(self) -> Dict[str, str]:
        return {"Authorization": f"bearer {self.token}"}
