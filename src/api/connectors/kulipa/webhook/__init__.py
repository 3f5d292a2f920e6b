"""Webhook Kulipa: superfície pública e parsing seguro."""

from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)
from .resource import WebhooksResource

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "WebhookRequestError",
    "WebhooksResource",
    "parse_webhook_request",
]
