from __future__ import annotations

import time
from typing import Any
from urllib.parse import quote

import httpx

from books_search.core.config import ClientConfig, get_client_config
from books_search.observability.logging import get_logger
from books_search.observability.metrics import increment, observe_ms

logger = get_logger(__name__)


class GoogleBooksError(Exception):
    pass


class GoogleBooksClientError(GoogleBooksError):
    pass


class GoogleBooksTransportError(GoogleBooksClientError):
    pass


class GoogleBooksStatusError(GoogleBooksClientError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Status Code: {status_code}")
        self.status_code = status_code


class GoogleBooksResponseError(GoogleBooksClientError):
    pass


class GoogleBooksClient:
    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._timeout = httpx.Timeout(self._config.timeout_seconds)
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def api_key(self) -> str | None:
        return self._config.api_key

    def volume_url(self, volume_id: str) -> str:
        return f"{self.base_url}/{quote(volume_id, safe='')}"

    async def _get_json(self, url: str, params: dict[str, Any], operation: str, volume_id: str | None = None) -> Any:
        started = time.perf_counter()
        logger.info("google_books.request.start", extra={"operation": operation, "volume_id": volume_id})
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.RequestError as exc:
            observe_ms("google_books.latency_ms", (time.perf_counter() - started) * 1000.0, labels={"operation": operation})
            increment("google_books.requests", labels={"operation": operation, "status": "transport_error"})
            logger.exception(
                "google_books.request.failed",
                extra={"operation": operation, "volume_id": volume_id, "error_code": "transport_error"},
            )
            raise GoogleBooksTransportError(str(exc)) from exc

        latency_ms = (time.perf_counter() - started) * 1000.0
        observe_ms("google_books.latency_ms", latency_ms, labels={"operation": operation})
        increment("google_books.requests", labels={"operation": operation, "status": response.status_code})

        if response.status_code != 200:
            logger.warning(
                "google_books.request.failed",
                extra={
                    "operation": operation,
                    "volume_id": volume_id,
                    "status_code": response.status_code,
                    "error_code": "unexpected_status",
                },
            )
            raise GoogleBooksStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.exception(
                "google_books.request.failed",
                extra={"operation": operation, "volume_id": volume_id, "status_code": 200, "error_code": "invalid_json"},
            )
            raise GoogleBooksResponseError(f"Google Books returned invalid JSON: {exc}") from exc

        logger.info(
            "google_books.request.end",
            extra={
                "operation": operation,
                "volume_id": volume_id,
                "status_code": 200,
                "latency_ms": round(latency_ms, 2),
            },
        )
        return payload

    async def search_volumes(self, params: dict[str, Any]) -> Any:
        return await self._get_json(self.base_url, params, operation="search")

    async def get_volume(self, volume_id: str, params: dict[str, Any] | None = None) -> Any:
        return await self._get_json(self.volume_url(volume_id), params or {}, operation="fetch", volume_id=volume_id)
