"""Settings do SDK Kulipa.

Configurações de API, pipeline outbound (idempotência, rate limit) e
verificação de webhooks. Defaults documentados:
- tolerância de timestamp do webhook: 5 min
- expiração do cache de chaves públicas: 1 h
- janela de rate limit: 300 requisições/min
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal
from urllib.parse import urlparse

from utils.errors import ConfigurationError

KulipaEnvironment = Literal["sandbox", "production"]

MAX_REQUEST_TIMEOUT_SECONDS: float = 600.0
MAX_RETRIES_LIMIT: int = 10
MAX_WEBHOOK_TOLERANCE_SECONDS: int = 3600
MAX_KEY_CACHE_EXPIRATION_SECONDS: int = 86400


@dataclass(frozen=True)
class KulipaSettings:
    """Configurações do SDK Kulipa.

    Attributes:
        api_key: API key enviada no header x-api-key
        base_url: URL base da API (http/https)
        environment: Ambiente alvo (sandbox|production)
        request_timeout_seconds: Timeout por requisição HTTP
        max_retries: Tentativas extras em erros transitórios (5xx, conexão)
        enable_idempotency: Liga o estágio de idempotência (POST/PUT/PATCH)
        auto_generate_idempotency_key: Gera chave quando o chamador não fornece
        enable_rate_limit_handling: Liga o governor de rate limit
        max_requests_per_window: Capacidade inicial da janela de quota
        webhook_timestamp_tolerance_seconds: Idade máxima aceita do webhook
        webhook_key_cache_expiration_seconds: TTL do cache de chaves públicas
    """

    # Credenciais
    api_key: str = ""
    base_url: str = ""
    environment: KulipaEnvironment = "sandbox"

    # HTTP
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    # Pipeline outbound
    enable_idempotency: bool = True
    auto_generate_idempotency_key: bool = False
    enable_rate_limit_handling: bool = True
    max_requests_per_window: int = 300

    # Webhooks
    webhook_timestamp_tolerance_seconds: int = 300
    webhook_key_cache_expiration_seconds: int = 3600

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Valida configurações do SDK.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"KULIPA_BASE_URL deve ser URL http/https válida: {self.base_url!r}")

        if self.environment not in ("sandbox", "production"):
            errors.append(f"KULIPA_ENVIRONMENT inválido: {self.environment}")

        if self.request_timeout_seconds <= 0:
            errors.append("KULIPA_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        elif self.request_timeout_seconds > MAX_REQUEST_TIMEOUT_SECONDS:
            errors.append("KULIPA_REQUEST_TIMEOUT_SECONDS não pode exceder 10 minutos")

        if not 0 <= self.max_retries <= MAX_RETRIES_LIMIT:
            errors.append("KULIPA_MAX_RETRIES deve estar entre 0 e 10")

        if self.enable_rate_limit_handling and self.max_requests_per_window <= 0:
            errors.append("KULIPA_MAX_REQUESTS_PER_WINDOW deve ser > 0")

        if self.webhook_timestamp_tolerance_seconds <= 0:
            errors.append("KULIPA_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS deve ser > 0")
        elif self.webhook_timestamp_tolerance_seconds > MAX_WEBHOOK_TOLERANCE_SECONDS:
            errors.append("KULIPA_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS não pode exceder 1 hora")

        if self.webhook_key_cache_expiration_seconds <= 0:
            errors.append("KULIPA_WEBHOOK_KEY_CACHE_EXPIRATION_SECONDS deve ser > 0")
        elif self.webhook_key_cache_expiration_seconds > MAX_KEY_CACHE_EXPIRATION_SECONDS:
            errors.append("KULIPA_WEBHOOK_KEY_CACHE_EXPIRATION_SECONDS não pode exceder 1 dia")

        return errors

    def ensure_valid(self) -> KulipaSettings:
        """Valida e retorna self; levanta ConfigurationError se houver erros."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(errors)
        return self


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def _parse_environment(env_str: str) -> KulipaEnvironment:
    """Converte string de ambiente para KulipaEnvironment."""
    if env_str.lower() in ("production", "prod"):
        return "production"
    return "sandbox"


def _load_kulipa_from_env() -> KulipaSettings:
    """Carrega KulipaSettings de variáveis de ambiente."""
    return KulipaSettings(
        api_key=os.getenv("KULIPA_API_KEY", ""),
        base_url=os.getenv("KULIPA_BASE_URL", ""),
        environment=_parse_environment(os.getenv("KULIPA_ENVIRONMENT", "sandbox")),
        request_timeout_seconds=float(os.getenv("KULIPA_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("KULIPA_MAX_RETRIES", "3")),
        enable_idempotency=_env_bool("KULIPA_ENABLE_IDEMPOTENCY", True),
        auto_generate_idempotency_key=_env_bool("KULIPA_AUTO_GENERATE_IDEMPOTENCY_KEY", False),
        enable_rate_limit_handling=_env_bool("KULIPA_ENABLE_RATE_LIMIT_HANDLING", True),
        max_requests_per_window=int(os.getenv("KULIPA_MAX_REQUESTS_PER_WINDOW", "300")),
        webhook_timestamp_tolerance_seconds=int(
            os.getenv("KULIPA_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS", "300")
        ),
        webhook_key_cache_expiration_seconds=int(
            os.getenv("KULIPA_WEBHOOK_KEY_CACHE_EXPIRATION_SECONDS", "3600")
        ),
    )


@lru_cache(maxsize=1)
def get_kulipa_settings() -> KulipaSettings:
    """Retorna instância cacheada de KulipaSettings."""
    return _load_kulipa_from_env()
