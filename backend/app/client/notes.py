"""
Notekeeper Client — Notes
===========================

Remote calls for /api/notes used by the presentation layer.

Only `create` sends the session token. `update` goes out unauthenticated,
mirroring the server, which does not require a token for PUT.
"""

from typing import Any, Dict, List

from app.client.base import ApiClient
from app.client.session import Session


class NotesClient(ApiClient):
    resource = "notes"

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.request("GET", self.url())

    async def create(self, session: Session, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a new note as the session's user."""
        return await self.request(
            "POST",
            self.url(),
            json=payload,
            headers=session.authorization_header(),
        )

    async def update(self, note_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", self.url(str(note_id)), json=payload)
