"""Verificação de autenticidade e frescor de webhooks Kulipa.

Validação em estágios, parando na primeira falha:
1. headers obrigatórios ausentes/vazios      -> MISSING_HEADERS
2. timestamp não-inteiro ou fora de int64   -> INVALID_TIMESTAMP_FORMAT
3. timestamp > agora + 1 min                 -> TIMESTAMP_IN_FUTURE
4. timestamp < agora - tolerância            -> TIMESTAMP_TOO_OLD
5. chave pública indisponível                -> KEY_FETCH_FAILED
6. algoritmo da chave != ECDSA_SHA_256       -> UNSUPPORTED_ALGORITHM
7. assinatura não confere ou erro de crypto  -> SIGNATURE_VERIFICATION_FAILED

Mensagem assinada: "{timestamp}.{raw_body}" usando o texto LITERAL do header
de timestamp e os bytes exatos do corpo. Não normalizar nenhum dos dois:
qualquer re-serialização quebra a verificação contra o assinante real.
"""

from __future__ import annotations

import logging
import re
import time
from typing import TYPE_CHECKING

from app.infra.crypto import SUPPORTED_ALGORITHM, SignatureCryptoError, verify_ecdsa_sha256
from app.webhooks.headers import (
    KEY_ID_HEADER,
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    get_header,
    normalize_headers,
)
from app.webhooks.models import VerificationFailureReason, WebhookVerificationResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.key_cache import PublicKeyCacheProtocol
    from app.webhooks.headers import HeadersInput

logger = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_TOLERANCE_SECONDS = 300  # 5 minutos
CLOCK_SKEW_ALLOWANCE_MS = 60_000  # 1 minuto para o futuro

_TIMESTAMP_RE = re.compile(r"\s*[+-]?[0-9]{1,19}\s*")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Reason = VerificationFailureReason


def parse_timestamp_ms(timestamp: str) -> int | None:
    """Converte o header de timestamp (epoch ms, int64) ou None se inválido.

    Espaços ao redor são aceitos só para o parse; a mensagem assinada usa
    sempre o texto literal do header.
    """
    if not _TIMESTAMP_RE.fullmatch(timestamp):
        return None
    value = int(timestamp)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def build_signed_message(timestamp: str, raw_body: bytes | str) -> bytes:
    """Monta a mensagem canônica assinada: b"{timestamp}." + corpo bruto."""
    body = raw_body if isinstance(raw_body, bytes) else raw_body.encode("utf-8")
    return timestamp.encode("utf-8") + b"." + body


class WebhookVerifier:
    """Verificador de webhooks assinados com ECDSA P-256.

    Args:
        key_cache: Cache de chaves públicas (nunca levanta exceção)
        timestamp_tolerance_seconds: Idade máxima aceita do webhook
        clock: Fonte de tempo em epoch segundos (injetável em testes)
    """

    def __init__(
        self,
        key_cache: PublicKeyCacheProtocol,
        timestamp_tolerance_seconds: float = DEFAULT_TIMESTAMP_TOLERANCE_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if timestamp_tolerance_seconds <= 0:
            raise ValueError("timestamp_tolerance_seconds deve ser > 0")
        self._key_cache = key_cache
        self._tolerance_ms = int(timestamp_tolerance_seconds * 1000)
        self._clock = clock

    async def verify_webhook(
        self,
        headers: HeadersInput | None,
        raw_body: bytes | str,
    ) -> WebhookVerificationResult:
        """Verifica webhook a partir dos headers e do corpo bruto.

        Args:
            headers: Mapping ou pares (nome, valor); nomes case-insensitive
            raw_body: Corpo exatamente como recebido

        Returns:
            WebhookVerificationResult (nunca levanta por payload inválido)
        """
        if headers is None:
            return self._reject(Reason.MISSING_HEADERS, "Headers are missing")

        normalized = normalize_headers(headers)
        return await self.verify_signature(
            get_header(normalized, SIGNATURE_HEADER),
            get_header(normalized, TIMESTAMP_HEADER),
            get_header(normalized, KEY_ID_HEADER),
            raw_body,
        )

    async def verify_signature(
        self,
        signature: str | None,
        timestamp: str | None,
        key_id: str | None,
        raw_body: bytes | str,
    ) -> WebhookVerificationResult:
        """Verifica os componentes já extraídos do webhook."""
        if not signature or not signature.strip():
            return self._reject(Reason.MISSING_HEADERS, "Missing signature")
        if not timestamp or not timestamp.strip():
            return self._reject(Reason.MISSING_HEADERS, "Missing timestamp")
        if not key_id or not key_id.strip():
            return self._reject(Reason.MISSING_HEADERS, "Missing key ID")

        webhook_ms = parse_timestamp_ms(timestamp)
        if webhook_ms is None:
            return self._reject(Reason.INVALID_TIMESTAMP_FORMAT, "Invalid timestamp format")

        now_ms = int(self._clock() * 1000)

        if webhook_ms > now_ms + CLOCK_SKEW_ALLOWANCE_MS:
            return self._reject(
                Reason.TIMESTAMP_IN_FUTURE,
                "Timestamp is in the future",
                webhook_ts_ms=webhook_ms,
            )

        if webhook_ms < now_ms - self._tolerance_ms:
            return self._reject(
                Reason.TIMESTAMP_TOO_OLD,
                f"Timestamp is older than {self._tolerance_ms / 60_000:g} minutes",
                webhook_ts_ms=webhook_ms,
            )

        webhook_key = await self._key_cache.get_key(key_id)
        if webhook_key is None:
            return self._reject(
                Reason.KEY_FETCH_FAILED,
                "Failed to fetch public key",
                key_id=key_id,
            )

        if webhook_key.algorithm.upper() != SUPPORTED_ALGORITHM:
            return self._reject(
                Reason.UNSUPPORTED_ALGORITHM,
                f"Unsupported algorithm: {webhook_key.algorithm}",
                key_id=key_id,
            )

        try:
            message = build_signed_message(timestamp, raw_body)
            is_valid = verify_ecdsa_sha256(webhook_key.public_key, message, signature)
        except (SignatureCryptoError, UnicodeEncodeError) as exc:
            return self._reject(
                Reason.SIGNATURE_VERIFICATION_FAILED,
                f"Signature verification error: {exc}",
                key_id=key_id,
            )
        except Exception as exc:
            logger.exception(
                "webhook_signature_verification_error",
                extra={"component": "webhook_verifier", "key_id": key_id},
            )
            return WebhookVerificationResult.failure(
                f"Signature verification error: {exc}",
                Reason.SIGNATURE_VERIFICATION_FAILED,
            )

        if not is_valid:
            return self._reject(
                Reason.SIGNATURE_VERIFICATION_FAILED,
                "Signature verification failed",
                key_id=key_id,
            )

        logger.debug(
            "webhook_verified",
            extra={"component": "webhook_verifier", "key_id": key_id},
        )
        return WebhookVerificationResult.success()

    def _reject(
        self,
        reason: VerificationFailureReason,
        message: str,
        **context: object,
    ) -> WebhookVerificationResult:
        logger.warning(
            "webhook_verification_failed",
            extra={"component": "webhook_verifier", "reason": reason.value, **context},
        )
        return WebhookVerificationResult.failure(message, reason)
