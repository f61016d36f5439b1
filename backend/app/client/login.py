"""
Notekeeper Client — Login
===========================
"""

from typing import Any, Dict

from app.client.base import ApiClient
from app.client.session import Session


class LoginClient(ApiClient):
    resource = "login"

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        POST credentials and return the body: {token, username, name}.

        A wrong password surfaces as httpx.HTTPStatusError with status 401.
        """
        return await self.request(
            "POST",
            self.url(),
            json={"username": username, "password": password},
        )

    async def start_session(self, username: str, password: str) -> Session:
        return Session.from_login(await self.login(username, password))
