"""Estágio de autenticação por API key (header x-api-key)."""

from __future__ import annotations

import httpx

API_KEY_HEADER = "x-api-key"


class ApiKeyAuthTransport(httpx.AsyncBaseTransport):
    """Adiciona x-api-key quando configurada e ainda ausente na requisição."""

    def __init__(self, inner: httpx.AsyncBaseTransport, api_key: str) -> None:
        self._inner = inner
        self._api_key = api_key

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if self._api_key and API_KEY_HEADER not in request.headers:
            request.headers[API_KEY_HEADER] = self._api_key
        return await self._inner.handle_async_request(request)

    async def aclose(self) -> None:
        await self._inner.aclose()
