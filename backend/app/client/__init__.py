# Client package init
"""
Notekeeper Client — Remote-Call Wrapper
=========================================

What:  Thin async wrappers a presentation layer uses to call the API.
How:   httpx.AsyncClient under the hood; every method returns the decoded
       response body or raises the httpx error.

Typical use:
    login = LoginClient()
    session = await login.start_session("mluukkai", "salainen")
    notes = NotesClient()
    await notes.create(session, {"content": "HTML is easy"})
"""

from app.client.login import LoginClient
from app.client.notes import NotesClient
from app.client.session import Session

__all__ = ["LoginClient", "NotesClient", "Session"]
