"""Formatter JSON do SDK.

Campos obrigatórios em todo log:
- asctime, level, logger, message
- correlation_id, service
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-18 10:30:00,123",
            "level": "WARNING",
            "logger": "app.webhooks.verifier",
            "message": "webhook_verification_failed",
            "correlation_id": "abc-123",
            "service": "kulipa_sdk",
            "reason": "timestamp_too_old"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
