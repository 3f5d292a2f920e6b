"""Cache em memória de chaves públicas de webhook.

Mapeia keyId -> WebhookKey com TTL. Em miss ou expiração busca a chave em
GET {base_url}/webhooks/keys/{keyId}. Sem persistência entre reinícios.

Concorrência: dict simples com get/set por chave, sem lock global. Dois
misses simultâneos da mesma chave podem buscar duas vezes (vence a última
escrita), o que é aceitável: a chave é imutável.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from app.protocols.key_cache import PublicKeyCacheProtocol
from app.webhooks.models import CachedKeyEntry, WebhookKey

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600  # 1 hora
KEYS_PATH = "webhooks/keys/"


class MemoryPublicKeyCache(PublicKeyCacheProtocol):
    """Cache de chaves públicas com TTL e invalidação manual.

    Args:
        http_client: Cliente httpx com base_url da API Kulipa (autenticado)
        ttl_seconds: Tempo de vida de cada entrada
        fetch_timeout_seconds: Timeout padrão da busca remota (None = sem limite extra)
        clock: Fonte de tempo em epoch segundos (injetável em testes)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        fetch_timeout_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds deve ser > 0")
        self._http = http_client
        self._ttl_seconds = ttl_seconds
        self._fetch_timeout_seconds = fetch_timeout_seconds
        self._clock = clock
        self._entries: dict[str, CachedKeyEntry] = {}

    async def get_key(self, key_id: str, timeout: float | None = None) -> WebhookKey | None:
        """Retorna chave do cache ou da API; None em qualquer falha."""
        if not key_id or not key_id.strip():
            logger.warning("webhook_key_id_empty", extra={"component": "key_cache"})
            return None

        entry = self._entries.get(key_id)
        if entry is not None and not entry.is_expired(self._clock()):
            logger.debug(
                "webhook_key_cache_hit",
                extra={"component": "key_cache", "key_id": key_id},
            )
            return entry.key

        effective_timeout = timeout if timeout is not None else self._fetch_timeout_seconds
        try:
            async with asyncio.timeout(effective_timeout):
                key = await self._fetch(key_id)
        except TimeoutError:
            logger.error(
                "webhook_key_fetch_timeout",
                extra={
                    "component": "key_cache",
                    "key_id": key_id,
                    "timeout_seconds": effective_timeout,
                },
            )
            return None
        except Exception:
            logger.exception(
                "webhook_key_fetch_unexpected_error",
                extra={"component": "key_cache", "key_id": key_id},
            )
            return None

        if key is None:
            return None

        expires_at = self._clock() + self._ttl_seconds
        self._entries[key_id] = CachedKeyEntry(key=key, expires_at=expires_at)
        logger.debug(
            "webhook_key_cached",
            extra={"component": "key_cache", "key_id": key_id, "expires_at": expires_at},
        )
        return key

    async def _fetch(self, key_id: str) -> WebhookKey | None:
        """Busca a chave na API. Erros esperados viram None com log."""
        logger.info("webhook_key_fetch", extra={"component": "key_cache", "key_id": key_id})
        try:
            response = await self._http.get(KEYS_PATH + quote(key_id, safe=""))
        except httpx.TimeoutException as exc:
            logger.error(
                "webhook_key_fetch_timeout",
                extra={
                    "component": "key_cache",
                    "key_id": key_id,
                    "error_type": type(exc).__name__,
                },
            )
            return None
        except httpx.HTTPError as exc:
            logger.error(
                "webhook_key_fetch_http_error",
                extra={
                    "component": "key_cache",
                    "key_id": key_id,
                    "error_type": type(exc).__name__,
                },
            )
            return None

        if not response.is_success:
            logger.warning(
                "webhook_key_fetch_failed",
                extra={
                    "component": "key_cache",
                    "key_id": key_id,
                    "status_code": response.status_code,
                },
            )
            return None

        try:
            return WebhookKey.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "webhook_key_malformed",
                extra={
                    "component": "key_cache",
                    "key_id": key_id,
                    "error_type": type(exc).__name__,
                },
            )
            return None

    def invalidate_key(self, key_id: str) -> None:
        """Remove a entrada da chave; no-op se ausente."""
        if not key_id or not key_id.strip():
            return
        if self._entries.pop(key_id, None) is not None:
            logger.debug(
                "webhook_key_invalidated",
                extra={"component": "key_cache", "key_id": key_id},
            )

    def clear(self) -> None:
        """Esvazia o cache."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(
            "webhook_key_cache_cleared",
            extra={"component": "key_cache", "items_cleared": count},
        )

    def stats(self) -> dict[str, int]:
        """Estatísticas do cache (debug/monitoramento)."""
        now = self._clock()
        entries = list(self._entries.values())
        return {
            "total_entries": len(entries),
            "expired_entries": sum(1 for entry in entries if entry.is_expired(now)),
        }
