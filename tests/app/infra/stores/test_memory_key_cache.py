"""Testes do MemoryPublicKeyCache."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from app.infra.stores import MemoryPublicKeyCache
from tests.fakes.kulipa_webhooks import KEY_ID, KeyEndpoint, SigningKey

BASE_URL = "https://api.kulipa.test/v1/"


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _cache(handler, clock: FakeClock | None = None, ttl: float = 3600) -> MemoryPublicKeyCache:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return MemoryPublicKeyCache(client, ttl_seconds=ttl, clock=clock or FakeClock())


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey()


@pytest.fixture
def endpoint(signing_key: SigningKey) -> KeyEndpoint:
    return KeyEndpoint({KEY_ID: signing_key.key_payload()})


class TestGetKey:
    """Busca, cache e TTL."""

    @pytest.mark.asyncio
    async def test_fetches_and_parses_key(self, endpoint: KeyEndpoint, signing_key: SigningKey) -> None:
        """Miss busca em GET webhooks/keys/{id} e mapeia publicKey."""
        cache = _cache(endpoint)

        key = await cache.get_key(KEY_ID)

        assert key is not None
        assert key.id == KEY_ID
        assert key.algorithm == "ECDSA_SHA_256"
        assert key.public_key == signing_key.public_pem
        assert key.created_at is not None
        assert endpoint.requests[0].url == httpx.URL(BASE_URL + "webhooks/keys/" + KEY_ID)

    @pytest.mark.asyncio
    async def test_hit_does_not_refetch(self, endpoint: KeyEndpoint) -> None:
        """Dentro do TTL a chave vem do cache, sem IO."""
        cache = _cache(endpoint)

        first = await cache.get_key(KEY_ID)
        second = await cache.get_key(KEY_ID)

        assert first == second
        assert len(endpoint.requests) == 1

    @pytest.mark.asyncio
    async def test_expired_entry_is_refetched(self, endpoint: KeyEndpoint) -> None:
        """Após o TTL a chave é buscada de novo."""
        clock = FakeClock()
        cache = _cache(endpoint, clock=clock, ttl=60)

        await cache.get_key(KEY_ID)
        clock.now += 59
        await cache.get_key(KEY_ID)
        assert len(endpoint.requests) == 1

        clock.now += 1
        await cache.get_key(KEY_ID)
        assert len(endpoint.requests) == 2

    @pytest.mark.asyncio
    async def test_key_id_is_url_encoded(self, signing_key: SigningKey) -> None:
        """IDs opacos com caracteres especiais são codificados no path."""
        endpoint = KeyEndpoint({"a b": signing_key.key_payload(key_id="a b")})
        cache = _cache(endpoint)

        await cache.get_key("a/b c")

        assert endpoint.requests[0].url.raw_path.endswith(b"webhooks/keys/a%2Fb%20c")

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, endpoint: KeyEndpoint) -> None:
        """404 -> None, sem cachear."""
        cache = _cache(endpoint)

        assert await cache.get_key("missing") is None
        assert await cache.get_key("missing") is None
        assert len(endpoint.requests) == 2

    @pytest.mark.asyncio
    async def test_server_error_returns_none(self) -> None:
        cache = _cache(KeyEndpoint(status_code=500))

        assert await cache.get_key(KEY_ID) is None

    @pytest.mark.asyncio
    async def test_malformed_body_returns_none(self) -> None:
        """Corpo que não é JSON -> None."""
        cache = _cache(KeyEndpoint({KEY_ID: b"<html>oops</html>"}))

        assert await cache.get_key(KEY_ID) is None

    @pytest.mark.asyncio
    async def test_missing_fields_returns_none(self) -> None:
        """JSON sem publicKey falha na validação -> None."""
        cache = _cache(KeyEndpoint({KEY_ID: {"id": KEY_ID, "algorithm": "ECDSA_SHA_256"}}))

        assert await cache.get_key(KEY_ID) is None

    @pytest.mark.asyncio
    async def test_connection_error_returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        cache = _cache(handler)

        assert await cache.get_key(KEY_ID) is None

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self, signing_key: SigningKey) -> None:
        """Busca mais lenta que o timeout -> None."""

        async def slow(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json=signing_key.key_payload())

        cache = _cache(slow)

        assert await cache.get_key(KEY_ID, timeout=0.01) is None

    @pytest.mark.parametrize("key_id", ["", "   "])
    @pytest.mark.asyncio
    async def test_blank_key_id_returns_none(self, endpoint: KeyEndpoint, key_id: str) -> None:
        cache = _cache(endpoint)

        assert await cache.get_key(key_id) is None
        assert endpoint.requests == []


class TestInvalidation:
    """invalidate_key, clear e stats."""

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(self, endpoint: KeyEndpoint) -> None:
        cache = _cache(endpoint)
        await cache.get_key(KEY_ID)

        cache.invalidate_key(KEY_ID)
        await cache.get_key(KEY_ID)

        assert len(endpoint.requests) == 2

    def test_invalidate_unknown_key_is_noop(self, endpoint: KeyEndpoint) -> None:
        cache = _cache(endpoint)
        cache.invalidate_key("nope")
        cache.invalidate_key("")
        assert cache.stats()["total_entries"] == 0

    @pytest.mark.asyncio
    async def test_clear_empties_cache(self, signing_key: SigningKey) -> None:
        endpoint = KeyEndpoint(
            {
                "k1": signing_key.key_payload(key_id="k1"),
                "k2": signing_key.key_payload(key_id="k2"),
            }
        )
        cache = _cache(endpoint)
        await cache.get_key("k1")
        await cache.get_key("k2")
        assert cache.stats()["total_entries"] == 2

        cache.clear()

        assert cache.stats()["total_entries"] == 0
        await cache.get_key("k1")
        assert len(endpoint.requests) == 3

    @pytest.mark.asyncio
    async def test_stats_counts_expired(self, endpoint: KeyEndpoint) -> None:
        clock = FakeClock()
        cache = _cache(endpoint, clock=clock, ttl=10)
        await cache.get_key(KEY_ID)

        clock.now += 10

        assert cache.stats() == {"total_entries": 1, "expired_entries": 1}

    def test_non_positive_ttl_raises(self, endpoint: KeyEndpoint) -> None:
        with pytest.raises(ValueError, match="ttl_seconds"):
            _cache(endpoint, ttl=0)
