"""Erros de criptografia da verificação de webhooks."""


class SignatureCryptoError(Exception):
    """Material de chave ou assinatura inutilizável."""
