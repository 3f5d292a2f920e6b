"""Infra HTTP do SDK: pipeline outbound e cliente base."""

from app.infra.http.auth import API_KEY_HEADER, ApiKeyAuthTransport
from app.infra.http.client import HttpClient, HttpClientConfig, HttpError
from app.infra.http.idempotency import (
    IDEMPOTENCY_KEY_EXTENSION,
    IDEMPOTENCY_KEY_HEADER,
    MAX_IDEMPOTENCY_KEY_LENGTH,
    IdempotencyKeyAssigner,
    IdempotencyTransport,
    generate_idempotency_key,
)
from app.infra.http.pipeline import build_transport
from app.infra.http.rate_limit import (
    RateLimitGovernor,
    RateLimitState,
    RateLimitTransport,
    parse_retry_after,
)

__all__ = [
    "API_KEY_HEADER",
    "IDEMPOTENCY_KEY_EXTENSION",
    "IDEMPOTENCY_KEY_HEADER",
    "MAX_IDEMPOTENCY_KEY_LENGTH",
    "ApiKeyAuthTransport",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "IdempotencyKeyAssigner",
    "IdempotencyTransport",
    "RateLimitGovernor",
    "RateLimitState",
    "RateLimitTransport",
    "build_transport",
    "generate_idempotency_key",
    "parse_retry_after",
]
