"""Mapeamento de respostas de erro da API Kulipa para exceções do SDK."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from utils.errors import (
    KulipaApiError,
    KulipaAuthenticationError,
    KulipaAuthorizationError,
    KulipaNotFoundError,
    KulipaServerError,
    KulipaValidationError,
)

if TYPE_CHECKING:
    import httpx

REQUEST_ID_HEADER = "x-request-id"


def extract_error_message(content: str, default: str) -> str:
    """Extrai "message" (ou "error") do corpo JSON; senão usa o default."""
    try:
        data = json.loads(content) if content else None
    except json.JSONDecodeError:
        return default

    if isinstance(data, dict):
        for field in ("message", "error"):
            value = data.get(field)
            if isinstance(value, str) and value.strip():
                return value
    return default


def parse_api_error(response: httpx.Response) -> KulipaApiError:
    """Converte resposta não-2xx na exceção correspondente.

    Args:
        response: Resposta já lida (response.text disponível)

    Returns:
        Exceção pronta para ser levantada pelo chamador.
    """
    status = response.status_code
    content = response.text
    request_id = response.headers.get(REQUEST_ID_HEADER)
    message = extract_error_message(content, f"Kulipa API error ({status})")

    if status == 400:
        return KulipaValidationError(message, content, request_id)
    if status == 401:
        return KulipaAuthenticationError(message, status, content, request_id)
    if status == 403:
        return KulipaAuthorizationError(message, status, content, request_id)
    if status == 404:
        return KulipaNotFoundError(message, status, content, request_id)
    if status >= 500:
        return KulipaServerError(message, status, content, request_id)
    return KulipaApiError(message, status, content, request_id)
