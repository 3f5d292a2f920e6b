"""Governor de rate limit do lado cliente.

Throttle cooperativo que evita estourar a quota da API Kulipa:
- antes do envio: se a quota acabou e a janela ainda não resetou, espera
  até reset_at (cancelável; limite opcional de espera)
- depois da resposta: x-ratelimit-remaining / x-ratelimit-reset substituem
  o estado; sem headers, o estado não muda
- resposta 429: levanta RateLimitExceededError (além de atualizar o estado)

O estado é protegido por um único threading.Lock. A seção crítica nunca faz
await, então o mesmo governor serve várias tasks e várias threads. O envio
em si roda fora do lock, concorrente com outras requisições.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import httpx

from utils.errors import RateLimitExceededError, RateLimitWaitTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

logger = logging.getLogger(__name__)

REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"
RETRY_AFTER_HEADER = "retry-after"
REQUEST_ID_HEADER = "x-request-id"

DEFAULT_MAX_REQUESTS_PER_WINDOW = 300
DEFAULT_WINDOW_SECONDS = 60.0
DEFAULT_RETRY_AFTER_SECONDS = 60


@dataclass(frozen=True, slots=True)
class RateLimitState:
    """Snapshot imutável do estado de quota."""

    remaining_requests: int
    reset_at: float  # epoch segundos

    @property
    def reset_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.reset_at, tz=timezone.utc)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_retry_after(headers: Mapping[str, str]) -> int:
    """Segundos de retry-after; 60 se ausente ou não-inteiro."""
    seconds = _parse_int(httpx.Headers(headers).get(RETRY_AFTER_HEADER))
    if seconds is None or seconds < 0:
        return DEFAULT_RETRY_AFTER_SECONDS
    return seconds


class RateLimitGovernor:
    """Estado de quota compartilhado pelo processo.

    Expõe apenas check-before-send (`acquire`) e update-after-response
    (`update_from_headers`); os campos internos nunca são acessados fora.

    Args:
        max_requests_per_window: Capacidade inicial da janela
        window_seconds: Duração inicial da janela
        clock: Fonte de tempo em epoch segundos
        sleep: Função de espera assíncrona (injetável em testes)
    """

    def __init__(
        self,
        max_requests_per_window: int = DEFAULT_MAX_REQUESTS_PER_WINDOW,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_requests_per_window <= 0:
            raise ValueError("max_requests_per_window deve ser > 0")
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._remaining = max_requests_per_window
        self._reset_at = clock() + window_seconds

    def snapshot(self) -> RateLimitState:
        """Retorna cópia consistente do estado atual."""
        with self._lock:
            return RateLimitState(self._remaining, self._reset_at)

    def _try_consume(self) -> float:
        """Consome uma unidade de quota; retorna 0 ou os segundos a esperar."""
        with self._lock:
            now = self._clock()
            if self._remaining > 0 or now >= self._reset_at:
                self._remaining = max(0, self._remaining - 1)
                return 0.0
            return self._reset_at - now

    async def acquire(self, max_wait_seconds: float | None = None) -> None:
        """Aguarda quota disponível antes do envio.

        Args:
            max_wait_seconds: Espera máxima acumulada; None = até o reset

        Raises:
            RateLimitWaitTimeoutError: Se a espera necessária excede o limite
            asyncio.CancelledError: Se a task for cancelada durante a espera
        """
        deadline = None if max_wait_seconds is None else self._clock() + max_wait_seconds
        while True:
            wait_seconds = self._try_consume()
            if wait_seconds <= 0:
                return

            if deadline is not None and self._clock() + wait_seconds > deadline:
                raise RateLimitWaitTimeoutError(wait_seconds, max_wait_seconds or 0.0)

            logger.warning(
                "rate_limit_wait",
                extra={"component": "rate_limit", "wait_seconds": round(wait_seconds, 3)},
            )
            await self._sleep(wait_seconds)

    def update_from_headers(self, headers: Mapping[str, str]) -> RateLimitState:
        """Aplica headers de quota da resposta de forma atômica.

        Returns:
            Snapshot do estado após a atualização.
        """
        normalized = httpx.Headers(headers)
        remaining = _parse_int(normalized.get(REMAINING_HEADER))
        reset_seconds = _parse_int(normalized.get(RESET_HEADER))

        with self._lock:
            if remaining is not None:
                self._remaining = max(0, remaining)
            if reset_seconds is not None:
                self._reset_at = self._clock() + reset_seconds
            state = RateLimitState(self._remaining, self._reset_at)

        request_id = normalized.get(REQUEST_ID_HEADER)
        if request_id:
            logger.debug(
                "rate_limit_state",
                extra={
                    "component": "rate_limit",
                    "request_id": request_id,
                    "remaining": state.remaining_requests,
                    "reset_at": state.reset_at,
                },
            )
        return state


class RateLimitTransport(httpx.AsyncBaseTransport):
    """Estágio do pipeline outbound que aplica o RateLimitGovernor."""

    def __init__(
        self,
        inner: httpx.AsyncBaseTransport,
        governor: RateLimitGovernor,
        max_wait_seconds: float | None = None,
    ) -> None:
        self._inner = inner
        self._governor = governor
        self._max_wait_seconds = max_wait_seconds

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await self._governor.acquire(self._max_wait_seconds)

        response = await self._inner.handle_async_request(request)
        state = self._governor.update_from_headers(response.headers)

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            retry_after = parse_retry_after(response.headers)
            request_id = response.headers.get(REQUEST_ID_HEADER)
            await response.aclose()
            logger.warning(
                "rate_limit_exceeded",
                extra={
                    "component": "rate_limit",
                    "request_id": request_id,
                    "retry_after_seconds": retry_after,
                    "remaining": state.remaining_requests,
                },
            )
            raise RateLimitExceededError(
                "Rate limit exceeded",
                remaining_requests=state.remaining_requests,
                reset_at=state.reset_at_datetime,
                retry_after_seconds=retry_after,
                request_id=request_id,
            )

        return response

    async def aclose(self) -> None:
        await self._inner.aclose()
