"""Modelos da verificação de webhooks Kulipa."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WebhookKey(BaseModel):
    """Chave pública de assinatura retornada por GET /webhooks/keys/{id}."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    algorithm: str = Field(min_length=1)
    public_key: str = Field(alias="publicKey", min_length=1)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


@dataclass(frozen=True, slots=True)
class CachedKeyEntry:
    """Entrada do cache de chaves: chave + instante de expiração (epoch s)."""

    key: WebhookKey
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now


class VerificationFailureReason(str, Enum):
    """Motivos de rejeição de um webhook."""

    MISSING_HEADERS = "missing_headers"
    INVALID_SIGNATURE_FORMAT = "invalid_signature_format"
    INVALID_TIMESTAMP_FORMAT = "invalid_timestamp_format"
    TIMESTAMP_TOO_OLD = "timestamp_too_old"
    TIMESTAMP_IN_FUTURE = "timestamp_in_future"
    KEY_FETCH_FAILED = "key_fetch_failed"
    INVALID_PUBLIC_KEY_FORMAT = "invalid_public_key_format"
    SIGNATURE_VERIFICATION_FAILED = "signature_verification_failed"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"


@dataclass(frozen=True, slots=True)
class WebhookVerificationResult:
    """Resultado da verificação de um webhook (nunca persistido)."""

    is_valid: bool
    failure_reason: VerificationFailureReason | None = None
    error_message: str | None = None

    @classmethod
    def success(cls) -> WebhookVerificationResult:
        return cls(is_valid=True)

    @classmethod
    def failure(
        cls,
        error_message: str,
        reason: VerificationFailureReason,
    ) -> WebhookVerificationResult:
        return cls(is_valid=False, failure_reason=reason, error_message=error_message)
