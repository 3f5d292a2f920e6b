"""Composição do pipeline outbound.

Ordem (de fora para dentro): auth -> idempotência -> rate limit -> transporte.
Retry fica fora do pipeline, no HttpClient.
"""

from __future__ import annotations

import httpx

from app.infra.http.auth import ApiKeyAuthTransport
from app.infra.http.idempotency import IdempotencyKeyAssigner, IdempotencyTransport
from app.infra.http.rate_limit import RateLimitGovernor, RateLimitTransport
from config.settings.kulipa import KulipaSettings


def build_transport(
    settings: KulipaSettings,
    governor: RateLimitGovernor | None = None,
    inner: httpx.AsyncBaseTransport | None = None,
    max_rate_limit_wait_seconds: float | None = None,
) -> httpx.AsyncBaseTransport:
    """Monta a cadeia de transports a partir das settings.

    Args:
        settings: Settings do SDK
        governor: Governor compartilhado (criado a partir das settings se None)
        inner: Transporte de rede (httpx.AsyncHTTPTransport se None)
        max_rate_limit_wait_seconds: Espera máxima pelo reset da quota

    Returns:
        Transport externo da cadeia.
    """
    transport: httpx.AsyncBaseTransport = inner or httpx.AsyncHTTPTransport()

    if settings.enable_rate_limit_handling:
        transport = RateLimitTransport(
            transport,
            governor or RateLimitGovernor(settings.max_requests_per_window),
            max_wait_seconds=max_rate_limit_wait_seconds,
        )

    transport = IdempotencyTransport(
        transport,
        IdempotencyKeyAssigner(
            enabled=settings.enable_idempotency,
            auto_generate=settings.auto_generate_idempotency_key,
        ),
    )
    return ApiKeyAuthTransport(transport, settings.api_key)
