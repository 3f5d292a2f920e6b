"""Cliente HTTP base com retry para a API Kulipa."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from app.infra.http.idempotency import IDEMPOTENCY_KEY_EXTENSION

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração de retry do cliente HTTP."""

    max_retries: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 30.0


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP sobre um httpx.AsyncClient já montado com o pipeline.

    Reenvia o mesmo Request em 5xx e falhas de conexão/timeout com backoff
    exponencial. 429 nunca é reenviado aqui: o pipeline levanta
    RateLimitExceededError e o chamador decide.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: HttpClientConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._config = config or HttpClientConfig()
        self._sleep = sleep

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        idempotency_key: str | None = None,
    ) -> httpx.Response:
        extensions = {IDEMPOTENCY_KEY_EXTENSION: idempotency_key} if idempotency_key else None
        request = self._client.build_request(
            method,
            path,
            json=json,
            params=params,
            headers=headers,
            extensions=extensions,
        )

        for attempt in range(self._config.max_retries + 1):
            is_last = attempt >= self._config.max_retries
            try:
                response = await self._client.send(request)
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if is_last:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                await self._backoff(attempt, reason=type(exc).__name__)
                continue

            if response.status_code >= 500 and not is_last:
                await response.aclose()
                await self._backoff(attempt, reason=f"status_{response.status_code}")
                continue

            return response

        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def _backoff(self, attempt: int, reason: str) -> None:
        backoff = min((2**attempt) * self._config.backoff_base_seconds, self._config.backoff_max_seconds)
        logger.info(
            "http_backoff",
            extra={"attempt": attempt + 1, "backoff_seconds": backoff, "reason": reason},
        )
        await self._sleep(backoff)
