"""Criptografia para verificação de webhooks Kulipa.

ECDSA sobre a curva NIST P-256 com SHA-256; assinaturas DER em hex/base64
e chaves públicas PEM distribuídas pelo endpoint de chaves.
"""

from .constants import SUPPORTED_ALGORITHM, SUPPORTED_CURVE_NAME
from .errors import SignatureCryptoError
from .keys import load_public_key
from .signature import decode_signature, verify_ecdsa_sha256

__all__ = [
    "SUPPORTED_ALGORITHM",
    "SUPPORTED_CURVE_NAME",
    "SignatureCryptoError",
    "decode_signature",
    "load_public_key",
    "verify_ecdsa_sha256",
]
