"""Atribuição de chave de idempotência para requisições mutáveis.

Apenas POST/PUT/PATCH recebem x-idempotency-key; GET/DELETE passam intactos.
Ordem de precedência:
1. header x-idempotency-key já presente -> mantido
2. chave fornecida fora de banda (request.extensions["idempotency_key"])
3. geração automática (se habilitada): sha256 de método, path, nonce e ms
Chave explícita acima de 64 caracteres falha a requisição (nunca truncada).
"""

from __future__ import annotations

import hashlib
import logging
import time
import uuid
from typing import TYPE_CHECKING

import httpx

from utils.errors import IdempotencyKeyTooLongError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

IDEMPOTENCY_KEY_HEADER = "x-idempotency-key"
IDEMPOTENCY_KEY_EXTENSION = "idempotency_key"
MAX_IDEMPOTENCY_KEY_LENGTH = 64
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH"})


def generate_idempotency_key(method: str, path: str, timestamp_ms: int | None = None) -> str:
    """Gera chave única: sha256(method|path|nonce|timestamp_ms) em hex (64 chars)."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    nonce = uuid.uuid4().hex
    material = f"{method.upper()}|{path}|{nonce}|{timestamp_ms}"
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def _ensure_length(key: str) -> str:
    if len(key) > MAX_IDEMPOTENCY_KEY_LENGTH:
        raise IdempotencyKeyTooLongError(len(key), MAX_IDEMPOTENCY_KEY_LENGTH)
    return key


class IdempotencyKeyAssigner:
    """Transformação pura por requisição; sem estado compartilhado.

    Args:
        enabled: Liga a atribuição (False = todas as requisições intactas)
        auto_generate: Gera chave quando nenhuma foi fornecida
        clock: Fonte de tempo em epoch segundos
    """

    def __init__(
        self,
        enabled: bool = True,
        auto_generate: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._enabled = enabled
        self._auto_generate = auto_generate
        self._clock = clock

    def assign(self, request: httpx.Request) -> str | None:
        """Anexa x-idempotency-key quando aplicável.

        Returns:
            Chave efetiva da requisição, ou None se nada foi anexado.

        Raises:
            IdempotencyKeyTooLongError: Chave explícita com mais de 64 chars
        """
        if not self._enabled or request.method.upper() not in MUTATING_METHODS:
            return None

        existing = request.headers.get(IDEMPOTENCY_KEY_HEADER)
        if existing is not None:
            return _ensure_length(existing)

        supplied = request.extensions.get(IDEMPOTENCY_KEY_EXTENSION)
        if supplied:
            key = _ensure_length(str(supplied))
            request.headers[IDEMPOTENCY_KEY_HEADER] = key
            return key

        if self._auto_generate:
            key = generate_idempotency_key(
                request.method,
                request.url.raw_path.decode("ascii"),
                int(self._clock() * 1000),
            )
            request.headers[IDEMPOTENCY_KEY_HEADER] = key
            logger.debug(
                "idempotency_key_generated",
                extra={"component": "idempotency", "method": request.method},
            )
            return key

        return None


class IdempotencyTransport(httpx.AsyncBaseTransport):
    """Estágio do pipeline outbound que aplica o IdempotencyKeyAssigner.

    O header é gravado no próprio Request: um reenvio do mesmo objeto
    (retry) reaproveita a chave da primeira tentativa.
    """

    def __init__(self, inner: httpx.AsyncBaseTransport, assigner: IdempotencyKeyAssigner) -> None:
        self._inner = inner
        self._assigner = assigner

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self._assigner.assign(request)
        return await self._inner.handle_async_request(request)

    async def aclose(self) -> None:
        await self._inner.aclose()
