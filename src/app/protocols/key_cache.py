"""Protocolo do cache de chaves públicas de webhook.

Interface leve (ABC) da qual o verificador depende; a implementação concreta
fica em app/infra/stores.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.webhooks.models import WebhookKey


class PublicKeyCacheProtocol(ABC):
    """Contrato do cache keyId -> WebhookKey.

    Métodos canônicos:
    - get_key(key_id) -> WebhookKey | None
      Nunca levanta exceção: qualquer falha de busca vira None.
    - invalidate_key(key_id) -> None
    - clear() -> None
    """

    @abstractmethod
    async def get_key(self, key_id: str, timeout: float | None = None) -> WebhookKey | None:
        """Retorna a chave do cache ou busca na API.

        Args:
            key_id: ID opaco da chave
            timeout: Limite em segundos para a busca remota

        Returns:
            WebhookKey ou None se ausente/falha.
        """

    @abstractmethod
    def invalidate_key(self, key_id: str) -> None:
        """Remove a entrada da chave, se existir."""

    @abstractmethod
    def clear(self) -> None:
        """Esvazia o cache."""
