"""Constantes criptográficas da verificação de webhooks Kulipa."""

# Único esquema de assinatura aceito (comparação case-insensitive)
SUPPORTED_ALGORITHM = "ECDSA_SHA_256"

# Curva exigida para a chave pública (NIST P-256)
SUPPORTED_CURVE_NAME = "secp256r1"
