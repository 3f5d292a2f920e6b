"""Factory de wiring do SDK Kulipa (bootstrap)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from api.connectors.kulipa import KulipaHttpClient, WebhooksResource
from app.infra.http import HttpClientConfig, RateLimitGovernor, build_transport
from app.infra.stores import MemoryPublicKeyCache
from app.webhooks import WebhookVerifier
from config.settings import KulipaSettings, get_kulipa_settings

logger = logging.getLogger(__name__)

USER_AGENT = "kulipa-sdk-python"


@dataclass
class KulipaSdk:
    """Componentes do SDK compartilhando um único httpx.AsyncClient."""

    settings: KulipaSettings
    http: httpx.AsyncClient
    client: KulipaHttpClient
    governor: RateLimitGovernor
    key_cache: MemoryPublicKeyCache
    verifier: WebhookVerifier
    webhooks: WebhooksResource

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> KulipaSdk:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _normalize_base_url(base_url: str) -> str:
    # httpx junta paths relativos ao base_url apenas se ele terminar em "/"
    return base_url if base_url.endswith("/") else base_url + "/"


def create_kulipa_sdk(
    settings: KulipaSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    max_rate_limit_wait_seconds: float | None = None,
) -> KulipaSdk:
    """Cria o SDK com dependências injetadas.

    Args:
        settings: KulipaSettings opcional. Se None, carrega do ambiente.
        transport: Transporte de rede interno (ex.: httpx.MockTransport em testes)
        max_rate_limit_wait_seconds: Espera máxima pelo reset da quota

    Raises:
        ConfigurationError: Se as settings forem inválidas
    """
    kulipa = settings or get_kulipa_settings()
    kulipa.ensure_valid()

    governor = RateLimitGovernor(kulipa.max_requests_per_window)
    http = httpx.AsyncClient(
        base_url=_normalize_base_url(kulipa.base_url),
        timeout=kulipa.request_timeout_seconds,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        transport=build_transport(
            kulipa,
            governor=governor,
            inner=transport,
            max_rate_limit_wait_seconds=max_rate_limit_wait_seconds,
        ),
    )

    key_cache = MemoryPublicKeyCache(
        http,
        ttl_seconds=kulipa.webhook_key_cache_expiration_seconds,
        fetch_timeout_seconds=kulipa.request_timeout_seconds,
    )
    verifier = WebhookVerifier(
        key_cache,
        timestamp_tolerance_seconds=kulipa.webhook_timestamp_tolerance_seconds,
    )
    client = KulipaHttpClient(http, HttpClientConfig(max_retries=kulipa.max_retries))

    logger.info(
        "kulipa_sdk_created",
        extra={
            "component": "bootstrap",
            "environment": kulipa.environment,
            "rate_limit_handling": kulipa.enable_rate_limit_handling,
            "idempotency": kulipa.enable_idempotency,
        },
    )
    return KulipaSdk(
        settings=kulipa,
        http=http,
        client=client,
        governor=governor,
        key_cache=key_cache,
        verifier=verifier,
        webhooks=WebhooksResource(verifier, key_cache),
    )
