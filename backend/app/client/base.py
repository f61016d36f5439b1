"""
Notekeeper Client — Shared HTTP Plumbing
==========================================

What:  Base class for the resource clients.
How:   Wraps an httpx.AsyncClient. The caller may inject one (tests pass a
       client bound to an ASGITransport or MockTransport); otherwise a short
       lived client is opened per call.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Stateless request builder for one API resource.

    Errors:
        Non-2xx responses raise httpx.HTTPStatusError (the response, with the
        server's JSON error body, is on `exc.response`). Transport failures
        propagate as httpx.TransportError subclasses. Nothing is retried.
    """

    resource = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._http = http
        self._timeout = timeout

    def url(self, *parts: str) -> str:
        return "/".join([self.base_url, self.resource, *parts]).rstrip("/")

    async def request(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None when empty)."""
        if self._http is not None:
            response = await self._http.request(method, url, json=json, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as http:
                response = await http.request(method, url, json=json, headers=headers)

        logger.debug("%s %s -> %d", method, url, response.status_code)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()
