"""Async JSON client for the API-level tests.

Wraps ``httpx.AsyncClient`` so tests deal with status, headers and decoded
JSON instead of transport details. Non-2xx statuses are returned, not raised:
negative tests assert on them. Transport failures propagate unchanged.

Usage:
    async with ApiClient() as api:
        response = await api.get("/users/1")
        assert response.status_code == 200
        assert response.body["id"] == 1
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from storefront_e2e.config import settings

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


@dataclass
class ApiResponse:
    """Status, headers and decoded JSON body of one response."""

    status_code: int
    headers: Dict[str, str]
    body: Any
    elapsed_ms: float

    @classmethod
    def from_httpx(cls, response: httpx.Response, elapsed_ms: float) -> ApiResponse:
        content_type = response.headers.get("content-type", "")
        body: Any = None
        if response.content and "json" in content_type:
            body = response.json()
        return cls(
            status_code=response.status_code,
            # httpx headers are case-insensitive; lower-case keys keep plain dict lookups working
            headers={key.lower(): value for key, value in response.headers.items()},
            body=body,
            elapsed_ms=elapsed_ms,
        )

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def __repr__(self) -> str:
        return f"<ApiResponse status={self.status_code} content_type={self.content_type!r}>"


class ApiClient:
    """JSON API client bound to one base URL.

    Args:
        base_url: API root (default: API_BASE_URL setting)
        timeout: Request timeout in seconds (default: PLAYWRIGHT_TIMEOUT_MS setting)
        headers: Headers sent with every request
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = settings.timeout_ms / 1000 if timeout is None else timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={**DEFAULT_HEADERS, **(headers or {})},
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        started = time.perf_counter()
        response = await self._client.request(
            method,
            path,
            json=json,
            headers=dict(headers) if headers else None,
            params=params,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"{method} {response.request.url} -> {response.status_code} ({elapsed_ms:.0f}ms)")
        return ApiResponse.from_httpx(response, elapsed_ms)

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", path, **kwargs)
