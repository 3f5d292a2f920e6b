"""Testes de crypto: carregamento de chave e verificação ECDSA."""

from __future__ import annotations

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from app.infra.crypto import (
    SignatureCryptoError,
    decode_signature,
    load_public_key,
    verify_ecdsa_sha256,
)
from tests.fakes.kulipa_webhooks import SigningKey

MESSAGE = b"1758011225399.{}"


def _pem(public_key) -> str:
    return public_key.public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


class TestLoadPublicKey:
    def test_loads_p256_key(self) -> None:
        key = load_public_key(SigningKey().public_pem)
        assert key.curve.name == "secp256r1"

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert load_public_key("\n  " + SigningKey().public_pem + "\n")

    @pytest.mark.parametrize("pem", ["", "   ", "-----BEGIN PUBLIC KEY-----\nAAAA\n-----END PUBLIC KEY-----"])
    def test_invalid_pem_raises(self, pem: str) -> None:
        with pytest.raises(SignatureCryptoError):
            load_public_key(pem)

    def test_other_curve_raises(self) -> None:
        pem = SigningKey(ec.SECP384R1()).public_pem
        with pytest.raises(SignatureCryptoError, match="Unsupported curve"):
            load_public_key(pem)

    def test_rsa_key_raises(self) -> None:
        rsa_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        with pytest.raises(SignatureCryptoError, match="not an elliptic curve"):
            load_public_key(_pem(rsa_key.public_key()))


class TestDecodeSignature:
    def test_hex(self) -> None:
        assert decode_signature("00ff10") == b"\x00\xff\x10"

    def test_hex_takes_precedence_over_base64(self) -> None:
        """O valor abcd é hex e base64 válido; hex vence."""
        assert decode_signature("abcd") == bytes.fromhex("abcd")

    def test_base64(self) -> None:
        raw = b"\x30\x45\x02\x20signature"
        assert decode_signature(base64.b64encode(raw).decode()) == raw

    def test_urlsafe_base64(self) -> None:
        raw = b"\xfb\xff\xfe"
        assert decode_signature(base64.urlsafe_b64encode(raw).decode()) == raw

    @pytest.mark.parametrize("value", ["", "   ", "!!!", "não-base64"])
    def test_invalid_encoding_raises(self, value: str) -> None:
        with pytest.raises(SignatureCryptoError):
            decode_signature(value)


class TestVerifyEcdsaSha256:
    def test_valid_signature(self) -> None:
        key = SigningKey()
        signature = key.sign("1758011225399", b"{}")
        assert verify_ecdsa_sha256(key.public_pem, MESSAGE, signature) is True

    def test_wrong_message(self) -> None:
        key = SigningKey()
        signature = key.sign("1758011225399", b"{}")
        assert verify_ecdsa_sha256(key.public_pem, MESSAGE + b" ", signature) is False

    def test_non_der_bytes_do_not_raise(self) -> None:
        """Bytes que não são DER válido resultam em False."""
        key = SigningKey()
        assert verify_ecdsa_sha256(key.public_pem, MESSAGE, "00" * 70) is False
