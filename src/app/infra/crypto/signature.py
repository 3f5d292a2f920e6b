"""Verificação de assinatura ECDSA P-256 / SHA-256 (DER)."""

from __future__ import annotations

import base64
import binascii
import re

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import SignatureCryptoError
from .keys import load_public_key

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})+")
_URLSAFE_B64_RE = re.compile(r"[A-Za-z0-9_\-]+={0,2}")


def decode_signature(signature: str) -> bytes:
    """Decodifica assinatura DER recebida em hex ou base64.

    Hex tem precedência: uma string hex de tamanho par nunca é tratada
    como base64.

    Raises:
        SignatureCryptoError: Se não for hex nem base64 válido
    """
    value = signature.strip()
    if not value:
        raise SignatureCryptoError("Empty signature")

    if _HEX_RE.fullmatch(value):
        return bytes.fromhex(value)

    padded = value + ("=" * (-len(value) % 4))
    try:
        return base64.b64decode(padded, validate=True)
    except (ValueError, binascii.Error):
        if not _URLSAFE_B64_RE.fullmatch(value):
            raise SignatureCryptoError("Invalid signature encoding") from None
        try:
            return base64.urlsafe_b64decode(padded)
        except (ValueError, binascii.Error) as exc:
            raise SignatureCryptoError(f"Invalid signature encoding: {exc}") from exc


def verify_ecdsa_sha256(public_key_pem: str, message: bytes, signature: str) -> bool:
    """Verifica assinatura ECDSA DER sobre SHA-256 da mensagem.

    Args:
        public_key_pem: Chave pública PEM (P-256)
        message: Bytes exatos que foram assinados
        signature: Assinatura DER codificada em hex ou base64

    Returns:
        True se assinatura válida, False se não confere

    Raises:
        SignatureCryptoError: Se chave ou assinatura forem inutilizáveis
    """
    public_key = load_public_key(public_key_pem)
    signature_bytes = decode_signature(signature)

    try:
        public_key.verify(signature_bytes, message, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return False
    return True
