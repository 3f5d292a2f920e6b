"""correlation_id por contexto (ContextVar) para logs do SDK.

O filtro de logging lê o valor via get_correlation_id; a aplicação define o
escopo ao redor de cada webhook recebido ou chamada à API.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("kulipa_correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id atual ou string vazia."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id (gera UUID v4 se None) e retorna o token de reset."""
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Escopo com correlation_id definido; restaura o anterior na saída.

    Uso:
        with correlation_scope(request.headers.get("x-request-id")):
            await sdk.webhooks.verify_webhook(headers, body)
    """
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
