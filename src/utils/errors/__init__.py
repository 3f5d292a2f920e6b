"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationError,
    IdempotencyKeyTooLongError,
    KulipaApiError,
    KulipaAuthenticationError,
    KulipaAuthorizationError,
    KulipaError,
    KulipaNotFoundError,
    KulipaServerError,
    KulipaValidationError,
    RateLimitExceededError,
    RateLimitWaitTimeoutError,
)

__all__ = [
    "ConfigurationError",
    "IdempotencyKeyTooLongError",
    "KulipaApiError",
    "KulipaAuthenticationError",
    "KulipaAuthorizationError",
    "KulipaError",
    "KulipaNotFoundError",
    "KulipaServerError",
    "KulipaValidationError",
    "RateLimitExceededError",
    "RateLimitWaitTimeoutError",
]
