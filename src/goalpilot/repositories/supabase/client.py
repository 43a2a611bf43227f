"""Thin async client for the Supabase REST and edge-function endpoints."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from goalpilot.contracts.exceptions import AuthenticationError, RepositoryError
from goalpilot.repositories.supabase._retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)

Params = dict[str, str]


def eq(value: str) -> str:
    return f"eq.{value}"


def in_(values: list[str]) -> str:
    quoted = ",".join(f'"{value}"' for value in values)
    return f"in.({quoted})"


def gte(value: str) -> str:
    return f"gte.{value}"


class SupabaseClient:
    """PostgREST table access plus edge-function invocation over one ``httpx.AsyncClient``.

    Use as an async context manager so the connection pool is closed::

        async with SupabaseClient(url, key) as client:
            rows = await client.select("steps", {"goal_id": eq(goal_id)})
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        max_retries: int = 3,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._api_key = api_key
        self._max_retries = max_retries
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> SupabaseClient:
        self._open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _open(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._url,
                headers={
                    "apikey": self._api_key,
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
                transport=RetryingTransport(transport=self._transport, max_retries=self._max_retries),
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def select(self, table: str, params: Params) -> list[dict[str, Any]]:
        rows = await self._request("GET", f"/rest/v1/{table}", params={"select": "*", **params})
        if not isinstance(rows, list):
            raise RepositoryError(f"unexpected payload from {table}: expected a list of rows")
        return rows

    async def insert(self, table: str, row: dict[str, Any]) -> list[dict[str, Any]]:
        rows = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            headers={"Prefer": "return=representation"},
        )
        if not isinstance(rows, list):
            raise RepositoryError(f"unexpected payload from {table}: expected a list of rows")
        return rows

    async def update(self, table: str, filters: Params, changes: dict[str, Any]) -> list[dict[str, Any]]:
        rows = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=filters,
            json=changes,
            headers={"Prefer": "return=representation"},
        )
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise RepositoryError(f"unexpected payload from {table}: expected a list of rows")
        return rows

    async def invoke(self, function: str, body: dict[str, Any], *, timeout: float | None = None) -> Any:
        return await self._request(
            "POST",
            f"/functions/v1/{function}",
            json=body,
            timeout=timeout if timeout is not None else self._timeout,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Params | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        client = self._open()
        _LOG.debug("%s %s %s", method, path, params or "")
        try:
            response = await client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.HTTPError as exc:
            raise RepositoryError(f"{method} {path} failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(f"{method} {path} rejected with HTTP {response.status_code}")
        if response.is_error:
            raise RepositoryError(f"{method} {path} failed with HTTP {response.status_code}: {response.text[:200]}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RepositoryError(f"{method} {path} returned invalid JSON") from exc
