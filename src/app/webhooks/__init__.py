"""Verificação de webhooks Kulipa (caminho inbound).

Invocado diretamente pela aplicação; não participa do pipeline outbound.
"""

from .headers import (
    KEY_ID_HEADER,
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    normalize_headers,
)
from .models import (
    CachedKeyEntry,
    VerificationFailureReason,
    WebhookKey,
    WebhookVerificationResult,
)
from .verifier import WebhookVerifier, build_signed_message

__all__ = [
    "KEY_ID_HEADER",
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "CachedKeyEntry",
    "VerificationFailureReason",
    "WebhookKey",
    "WebhookVerificationResult",
    "WebhookVerifier",
    "build_signed_message",
    "normalize_headers",
]
