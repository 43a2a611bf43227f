"""httpx async transport wrapper that retries transient backend failures."""

from __future__ import annotations

import asyncio
import logging
import random

import httpx

_LOG = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})
_MAX_BACKOFF_SECONDS = 4.0
_MAX_RETRY_AFTER_SECONDS = 30.0


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with retries on transient failures.

    - 429 / 502 / 503 / 504 responses are retried, honouring ``Retry-After``
      (capped at 30 seconds) before the exponential backoff.
    - Transport-level errors (connection reset, timeout, ...) are retried.
    - After *max_retries* retries the last response is returned, or the last
      transport error re-raised, so the caller can map it.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries:
                    raise
                _LOG.warning("%s %s failed (%s); retrying", request.method, request.url.path, exc)
                await self._sleep_backoff(attempt)
                attempt += 1
                continue

            if response.status_code not in _RETRYABLE_STATUS_CODES or attempt >= self._max_retries:
                return response

            _LOG.warning(
                "%s %s returned %d; retrying", request.method, request.url.path, response.status_code
            )
            await response.aclose()
            retry_after = self._parse_retry_after(response)
            if retry_after > 0:
                await asyncio.sleep(retry_after)
            await self._sleep_backoff(attempt)
            attempt += 1

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 0.0
        try:
            return min(_MAX_RETRY_AFTER_SECONDS, max(0.0, float(raw)))
        except ValueError:
            return 0.0

    @staticmethod
    async def _sleep_backoff(attempt: int) -> None:
        seconds = min(_MAX_BACKOFF_SECONDS, 0.25 * float(2**attempt)) + random.uniform(0.0, 0.1)
        _LOG.debug("Backing off %.2fs before retry %d", seconds, attempt + 1)
        await asyncio.sleep(seconds)
