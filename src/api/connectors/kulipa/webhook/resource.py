"""Superfície pública de webhooks do SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols import PublicKeyCacheProtocol, WebhookVerifierProtocol
    from app.webhooks import WebhookVerificationResult
    from app.webhooks.headers import HeadersInput


class WebhooksResource:
    """Verificação de webhooks e gestão do cache de chaves.

    Args:
        verifier: Verificador de assinatura/frescor
        key_cache: Cache compartilhado com o verificador
    """

    def __init__(
        self,
        verifier: WebhookVerifierProtocol,
        key_cache: PublicKeyCacheProtocol,
    ) -> None:
        self._verifier = verifier
        self._key_cache = key_cache

    async def verify_webhook(
        self,
        headers: HeadersInput | None,
        raw_body: bytes | str,
    ) -> WebhookVerificationResult:
        return await self._verifier.verify_webhook(headers, raw_body)

    async def verify_signature(
        self,
        signature: str | None,
        timestamp: str | None,
        key_id: str | None,
        raw_body: bytes | str,
    ) -> WebhookVerificationResult:
        return await self._verifier.verify_signature(signature, timestamp, key_id, raw_body)

    def invalidate_cached_key(self, key_id: str) -> None:
        """Força nova busca da chave na próxima verificação (ex.: rotação)."""
        self._key_cache.invalidate_key(key_id)

    def clear_key_cache(self) -> None:
        self._key_cache.clear()
