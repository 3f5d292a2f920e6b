"""Bootstrap do SDK - inicialização e wiring.

Composition root: configura logging e conecta implementações concretas aos
protocolos.

Uso:
    from app.bootstrap import create_kulipa_sdk, initialize_logging

    initialize_logging()
    async with create_kulipa_sdk() as sdk:
        result = await sdk.webhooks.verify_webhook(headers, raw_body)
"""

from __future__ import annotations

import os

from app.bootstrap.kulipa_factory import KulipaSdk, create_kulipa_sdk
from app.observability import get_correlation_id
from config.logging import DEFAULT_SERVICE_NAME, configure_logging

DEFAULT_LOG_LEVEL = "INFO"


def initialize_logging(level: str | None = None) -> None:
    """Configura logging JSON com correlation_id.

    Nível vem do argumento, de KULIPA_LOG_LEVEL ou do padrão INFO.
    """
    configure_logging(
        level=(level or os.getenv("KULIPA_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper(),
        service_name=DEFAULT_SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


__all__ = [
    "KulipaSdk",
    "create_kulipa_sdk",
    "initialize_logging",
]
