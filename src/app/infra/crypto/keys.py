"""Carregamento de chave pública ECDSA em PEM."""

from __future__ import annotations

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .constants import SUPPORTED_CURVE_NAME
from .errors import SignatureCryptoError


def load_public_key(public_key_pem: str) -> ec.EllipticCurvePublicKey:
    """Carrega chave pública EC (P-256) em formato PEM.

    Args:
        public_key_pem: Chave pública PEM (SubjectPublicKeyInfo)

    Returns:
        Chave pública EC

    Raises:
        SignatureCryptoError: Se PEM inválido, chave não-EC ou curva diferente
    """
    if not public_key_pem or not public_key_pem.strip():
        raise SignatureCryptoError("Empty public key")

    try:
        public_key = serialization.load_pem_public_key(public_key_pem.strip().encode("utf-8"))
    except (ValueError, TypeError) as exc:
        raise SignatureCryptoError(f"Invalid public key: {exc}") from exc

    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        raise SignatureCryptoError("Public key is not an elliptic curve key")

    if public_key.curve.name != SUPPORTED_CURVE_NAME:
        raise SignatureCryptoError(f"Unsupported curve: {public_key.curve.name}")

    return public_key
