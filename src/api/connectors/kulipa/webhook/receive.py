"""Verificação e parse do webhook recebido (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from api.connectors.kulipa.webhook.resource import WebhooksResource
    from app.webhooks import VerificationFailureReason
    from app.webhooks.headers import HeadersInput


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Webhook rejeitado pela verificação de assinatura/frescor."""

    def __init__(self, message: str, reason: VerificationFailureReason | None) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


async def parse_webhook_request(
    raw_body: bytes,
    headers: HeadersInput | None,
    resource: WebhooksResource,
) -> dict[str, object]:
    """Verifica o webhook e só então parseia o JSON.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        resource: WebhooksResource do SDK

    Raises:
        InvalidSignatureError: Se a verificação falhar
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        Payload do evento.
    """
    result = await resource.verify_webhook(headers, raw_body)
    if not result.is_valid:
        raise InvalidSignatureError(
            result.error_message or "invalid_signature",
            result.failure_reason,
        )

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload
