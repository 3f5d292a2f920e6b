"""Normalização de headers de webhook.

Aceita Mapping (chaves únicas) ou sequência de pares (nome, valor). Tudo vira
um único dict com nomes em minúsculas antes de qualquer validação; em pares
duplicados vale o último, como na semântica HTTP usual.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

SIGNATURE_HEADER = "x-kulipa-signature"
TIMESTAMP_HEADER = "x-kulipa-signature-ts"
KEY_ID_HEADER = "x-kulipa-key-id"

HeaderValue = str | bytes
HeadersInput = Mapping[HeaderValue, HeaderValue] | Iterable[tuple[HeaderValue, HeaderValue]]


def _to_text(value: HeaderValue) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def normalize_headers(headers: HeadersInput) -> dict[str, str]:
    """Converte headers em dict case-insensitive (chaves minúsculas).

    Args:
        headers: Mapping ou iterável de pares (str ou bytes, ex.: ASGI raw)

    Returns:
        Dict nome_minúsculo -> valor
    """
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    normalized: dict[str, str] = {}
    for name, value in pairs:
        normalized[_to_text(name).strip().lower()] = _to_text(value)
    return normalized


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Retorna valor não-vazio do header ou None."""
    value = headers.get(name.lower())
    if value is None or not value.strip():
        return None
    return value
