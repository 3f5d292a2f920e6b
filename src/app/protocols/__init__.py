"""Protocolos e contratos do core do SDK."""

from .key_cache import PublicKeyCacheProtocol
from .webhook_verifier import WebhookVerifierProtocol

__all__ = [
    "PublicKeyCacheProtocol",
    "WebhookVerifierProtocol",
]
