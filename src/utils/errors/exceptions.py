"""Exceções do SDK Kulipa.

Rejeições de webhook NÃO aparecem aqui: são devolvidas como
WebhookVerificationResult. As exceções abaixo representam condições em que
o chamador precisa agir (quota, chave inválida, configuração, erro da API).
"""

from __future__ import annotations

from datetime import datetime


class KulipaError(Exception):
    """Base para todos os erros do SDK."""

    def __init__(self, message: str, request_id: str | None = None) -> None:
        super().__init__(message)
        self.request_id = request_id


class ConfigurationError(KulipaError, ValueError):
    """Configuração do SDK inválida."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Configuração Kulipa inválida: " + "; ".join(errors))
        self.errors = list(errors)


class KulipaApiError(KulipaError):
    """Resposta de erro retornada pela API Kulipa."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_content: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, request_id)
        self.status_code = status_code
        self.response_content = response_content


class KulipaValidationError(KulipaApiError):
    """Payload rejeitado pela API (400)."""

    def __init__(
        self,
        message: str,
        response_content: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, 400, response_content, request_id)


class KulipaAuthenticationError(KulipaApiError):
    """API key ausente ou inválida (401)."""


class KulipaAuthorizationError(KulipaApiError):
    """Sem permissão para o recurso (403)."""


class KulipaNotFoundError(KulipaApiError):
    """Recurso inexistente (404)."""


class KulipaServerError(KulipaApiError):
    """Falha do lado da Kulipa (5xx)."""


class RateLimitExceededError(KulipaApiError):
    """Quota excedida (429).

    `retry_after_seconds` vem do header retry-after; `reset_at` vem do estado
    do governor (x-ratelimit-reset). Os dois podem divergir.
    """

    def __init__(
        self,
        message: str,
        remaining_requests: int,
        reset_at: datetime,
        retry_after_seconds: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, 429, None, request_id)
        self.remaining_requests = remaining_requests
        self.reset_at = reset_at
        self.retry_after_seconds = retry_after_seconds


class RateLimitWaitTimeoutError(KulipaError, TimeoutError):
    """Espera pelo reset da janela excederia o limite do chamador."""

    def __init__(self, wait_seconds: float, max_wait_seconds: float) -> None:
        super().__init__(
            f"Espera de {wait_seconds:.1f}s excede o máximo de {max_wait_seconds:.1f}s"
        )
        self.wait_seconds = wait_seconds
        self.max_wait_seconds = max_wait_seconds


class IdempotencyKeyTooLongError(KulipaError, ValueError):
    """Chave de idempotência explícita acima do limite (nunca truncada)."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            f"x-idempotency-key com {length} caracteres; máximo permitido é {max_length}"
        )
        self.length = length
        self.max_length = max_length
