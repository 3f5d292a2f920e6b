"""Testes de KulipaSettings."""

from __future__ import annotations

import pytest

from config.settings.kulipa import KulipaSettings, _load_kulipa_from_env, get_kulipa_settings
from utils.errors import ConfigurationError

VALID = {"api_key": "sk_test", "base_url": "https://api.kulipa.test/v1"}


class TestValidate:
    def test_valid_settings(self) -> None:
        settings = KulipaSettings(**VALID)
        assert settings.validate() == []
        assert settings.ensure_valid() is settings

    def test_defaults(self) -> None:
        settings = KulipaSettings(**VALID)
        assert settings.environment == "sandbox"
        assert settings.is_production is False
        assert settings.request_timeout_seconds == 30
        assert settings.max_retries == 3
        assert settings.enable_idempotency is True
        assert settings.auto_generate_idempotency_key is False
        assert settings.max_requests_per_window == 300
        assert settings.webhook_timestamp_tolerance_seconds == 300
        assert settings.webhook_key_cache_expiration_seconds == 3600

    @pytest.mark.parametrize("base_url", ["", "api.kulipa.test", "ftp://api.kulipa.test"])
    def test_invalid_base_url(self, base_url: str) -> None:
        errors = KulipaSettings(api_key="k", base_url=base_url).validate()
        assert any("KULIPA_BASE_URL" in error for error in errors)

    @pytest.mark.parametrize(
        ("field", "value", "env_name"),
        [
            ("request_timeout_seconds", 0, "KULIPA_REQUEST_TIMEOUT_SECONDS"),
            ("request_timeout_seconds", 601, "KULIPA_REQUEST_TIMEOUT_SECONDS"),
            ("max_retries", 11, "KULIPA_MAX_RETRIES"),
            ("max_retries", -1, "KULIPA_MAX_RETRIES"),
            ("max_requests_per_window", 0, "KULIPA_MAX_REQUESTS_PER_WINDOW"),
            ("webhook_timestamp_tolerance_seconds", 0, "KULIPA_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS"),
            ("webhook_timestamp_tolerance_seconds", 3601, "KULIPA_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS"),
            ("webhook_key_cache_expiration_seconds", 0, "KULIPA_WEBHOOK_KEY_CACHE_EXPIRATION_SECONDS"),
            ("webhook_key_cache_expiration_seconds", 86401, "KULIPA_WEBHOOK_KEY_CACHE_EXPIRATION_SECONDS"),
        ],
    )
    def test_out_of_range_values(self, field: str, value: int, env_name: str) -> None:
        errors = KulipaSettings(**VALID, **{field: value}).validate()
        assert len(errors) == 1
        assert env_name in errors[0]

    def test_ensure_valid_raises_with_all_errors(self) -> None:
        settings = KulipaSettings(base_url="", max_retries=99)
        with pytest.raises(ConfigurationError) as exc_info:
            settings.ensure_valid()
        assert len(exc_info.value.errors) == 2
        assert isinstance(exc_info.value, ValueError)


class TestLoadFromEnv:
    def test_loads_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KULIPA_API_KEY", "sk_env")
        monkeypatch.setenv("KULIPA_BASE_URL", "https://api.kulipa.io")
        monkeypatch.setenv("KULIPA_ENVIRONMENT", "prod")
        monkeypatch.setenv("KULIPA_MAX_RETRIES", "5")
        monkeypatch.setenv("KULIPA_AUTO_GENERATE_IDEMPOTENCY_KEY", "true")
        monkeypatch.setenv("KULIPA_ENABLE_RATE_LIMIT_HANDLING", "0")
        monkeypatch.setenv("KULIPA_WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS", "120")

        settings = _load_kulipa_from_env()

        assert settings.api_key == "sk_env"
        assert settings.base_url == "https://api.kulipa.io"
        assert settings.is_production is True
        assert settings.max_retries == 5
        assert settings.auto_generate_idempotency_key is True
        assert settings.enable_rate_limit_handling is False
        assert settings.webhook_timestamp_tolerance_seconds == 120

    def test_blank_bool_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KULIPA_ENABLE_IDEMPOTENCY", " ")
        assert _load_kulipa_from_env().enable_idempotency is True

    def test_get_kulipa_settings_is_cached(self) -> None:
        get_kulipa_settings.cache_clear()
        assert get_kulipa_settings() is get_kulipa_settings()
        get_kulipa_settings.cache_clear()
