"""Thin async JSON client that maps HTTP failures onto the error taxonomy."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx

from ...config import BaseConfig
from ...errors import NetworkOrServerError, ValidationRejected
from ...logging_config import get_logger

logger = get_logger(__name__)

QueryParams = Sequence[tuple[str, str]]


def extract_server_message(response: httpx.Response) -> Optional[str]:
    """Pull a human-readable message out of an error body, if the backend sent one."""

    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


class ApiClient:
    """Wraps ``httpx.AsyncClient``; every failure surfaces as a ``PocketLedgerError``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_config(cls, config: BaseConfig) -> "ApiClient":
        return cls(config.API_BASE_URL, timeout=config.REQUEST_TIMEOUT)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: QueryParams | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` for empty bodies)."""

        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TimeoutException as exc:
            logger.warning(f"{method} {path} timed out")
            raise NetworkOrServerError("The server did not respond in time") from exc
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {path} failed: {exc}")
            raise NetworkOrServerError(f"Could not reach the server: {exc}") from exc

        status = response.status_code
        if status >= 500:
            raise NetworkOrServerError(
                f"Server error {status} for {method} {path}",
                status_code=status,
                server_message=extract_server_message(response),
            )
        if status >= 400:
            raise ValidationRejected(
                f"Request {method} {path} rejected with status {status}",
                status_code=status,
                server_message=extract_server_message(response),
            )
        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkOrServerError(
                f"Unreadable response for {method} {path}", status_code=status
            ) from exc

    async def get(self, path: str, *, params: QueryParams | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
