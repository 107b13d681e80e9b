"""
web/client.py -- In-process HTTP client the page renderers use to call the JSON API.

Pages never touch the stores. They call the same /api endpoints a browser
or script would, through httpx over ASGITransport, so every page goes through
the API's authentication, access rules and validation. The visitor's Cookie
header is forwarded (it carries the JWT) together with an Accept-Language
header naming the page's locale, so API messages come back already
translated.

Usage (inside an async route handler):
    api = InternalApi(request, locale)
    data = await api.get(f"/api/company/{company_id}/stock", page=1, limit=10)
    if data is None:
        ...  # render not_found
    result = await api.send("POST", f"/api/company/{company_id}/stock", {"name": "Main"})
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from fastapi import Request

from core.config import get_settings

logger = logging.getLogger("companyhub.web")

_TIMEOUT = 30


@dataclass
class ApiResult:
    """Outcome of a write call. messages holds the API's (translated) error texts."""

    status_code: int
    data: Any = None
    messages: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _error_messages(body: Any) -> list[str]:
    if not isinstance(body, dict):
        return []
    messages = [e.get("message", "") for e in body.get("errors", []) if isinstance(e, dict)]
    return [m for m in messages if m]


class InternalApi:
    def __init__(self, request: Request, locale: str) -> None:
        self._app = request.app
        self._headers = {"Accept-Language": locale}
        cookie = request.headers.get("cookie")
        if cookie:
            self._headers["Cookie"] = cookie
        # The API sees the visitor's address, not the loopback, for anonymous rate limits.
        self._peer = (request.client.host, request.client.port) if request.client else ("127.0.0.1", 123)

    def _client(self) -> httpx.AsyncClient:
        transport = httpx.ASGITransport(app=self._app, raise_app_exceptions=False, client=self._peer)
        return httpx.AsyncClient(
            transport=transport,
            base_url=get_settings().internal_base_url,
            headers=self._headers,
            timeout=_TIMEOUT,
        )

    async def get(self, path: str, **params: Any) -> Optional[dict]:
        """GET a JSON document. Returns None on any non-200 answer or transport failure."""
        try:
            async with self._client() as client:
                resp = await client.get(path, params=params or None)
        except httpx.HTTPError as exc:
            logger.warning("Internal GET %s failed: %s", path, exc)
            return None
        if resp.status_code != 200:
            logger.debug("Internal GET %s returned %d", path, resp.status_code)
            return None
        return resp.json()

    async def send(self, method: str, path: str, json: Any = None) -> ApiResult:
        """Forward a write. Transport failures come back as a 502 result without messages."""
        try:
            async with self._client() as client:
                resp = await client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("Internal %s %s failed: %s", method, path, exc)
            return ApiResult(status_code=502)
        try:
            body = resp.json()
        except ValueError:
            body = None
        if 200 <= resp.status_code < 300:
            return ApiResult(status_code=resp.status_code, data=body)
        return ApiResult(status_code=resp.status_code, data=body, messages=_error_messages(body))
