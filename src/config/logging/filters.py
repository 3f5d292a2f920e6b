"""Filters de logging do SDK.

- CorrelationIdFilter: injeta service e correlation_id em cada record
- SensitiveFieldFilter: mascara campos sensíveis passados via `extra`
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Campos de `extra` que nunca devem sair em claro
SENSITIVE_FIELDS = frozenset({"api_key", "signature", "public_key", "idempotency_key"})

MASK = "***"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        # correlation_id explícito via `extra` tem precedência
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara valores de campos sensíveis no record.

    Mantém os 4 primeiros caracteres para permitir correlação em debug.
    """

    def __init__(self, fields: Iterable[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self._fields:
            value = record.__dict__.get(field)
            if value:
                record.__dict__[field] = mask_value(str(value))
        return True


def mask_value(value: str, visible: int = 4) -> str:
    """Mascara valor mantendo prefixo curto."""
    if len(value) <= visible:
        return MASK
    return value[:visible] + MASK
