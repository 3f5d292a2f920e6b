"""Protocolo do verificador de webhooks.

Evita que a camada api dependa da implementação concreta do verificador.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.webhooks.headers import HeadersInput
    from app.webhooks.models import WebhookVerificationResult


class WebhookVerifierProtocol(Protocol):
    """Contrato mínimo de verificação de webhook."""

    async def verify_signature(
        self,
        signature: str | None,
        timestamp: str | None,
        key_id: str | None,
        raw_body: bytes | str,
    ) -> WebhookVerificationResult: ...

    async def verify_webhook(
        self,
        headers: HeadersInput | None,
        raw_body: bytes | str,
    ) -> WebhookVerificationResult: ...
