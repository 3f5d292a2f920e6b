"""Conector Kulipa - adapter de borda para a API Kulipa.

Responsabilidades:
- Webhooks (verificação e parsing)
- Cliente HTTP JSON sobre o pipeline outbound
- Mapeamento de erros da API
"""

from .api_errors import parse_api_error
from .http_client import KulipaHttpClient
from .webhook import WebhooksResource, parse_webhook_request

__all__ = [
    "KulipaHttpClient",
    "WebhooksResource",
    "parse_api_error",
    "parse_webhook_request",
]
