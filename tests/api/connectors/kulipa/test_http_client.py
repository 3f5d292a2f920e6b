"""Testes do KulipaHttpClient."""

from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.kulipa import KulipaHttpClient
from app.infra.http import HttpClientConfig
from utils.errors import KulipaApiError, KulipaNotFoundError, KulipaValidationError

BASE_URL = "https://api.kulipa.test/v1/"


def _client(handler) -> KulipaHttpClient:
    http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return KulipaHttpClient(http, HttpClientConfig(max_retries=0))


class TestJsonHelpers:
    @pytest.mark.asyncio
    async def test_get_returns_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["limit"] == "10"
            return httpx.Response(200, json={"items": [1, 2]})

        data = await _client(handler).get("cards", params={"limit": 10})

        assert data == {"items": [1, 2]}

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "card_1"})

        data = await _client(handler).post("cards", {"amount": 10})

        assert data == {"id": "card_1"}
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"amount": 10}

    @pytest.mark.asyncio
    async def test_put_and_delete(self) -> None:
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            if request.method == "DELETE":
                return httpx.Response(204)
            return httpx.Response(200, json={})

        client = _client(handler)
        await client.put("cards/card_1", {"status": "frozen"})
        result = await client.delete("cards/card_1")

        assert methods == ["PUT", "DELETE"]
        assert result is None

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self) -> None:
        result = await _client(lambda request: httpx.Response(204)).delete("cards/card_1")

        assert result is None


class TestErrors:
    @pytest.mark.asyncio
    async def test_404_raises_not_found(self) -> None:
        client = _client(lambda request: httpx.Response(404, json={"message": "Card not found"}))

        with pytest.raises(KulipaNotFoundError, match="Card not found"):
            await client.get("cards/missing")

    @pytest.mark.asyncio
    async def test_400_raises_validation(self) -> None:
        client = _client(lambda request: httpx.Response(400, json={"message": "amount required"}))

        with pytest.raises(KulipaValidationError) as exc_info:
            await client.post("cards", {})

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_json_success_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="not json"))

        with pytest.raises(KulipaApiError, match="Response JSON inválido"):
            await client.get("cards")
