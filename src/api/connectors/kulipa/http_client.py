"""Cliente HTTP especializado para a API Kulipa.

Estende HttpClient com:
- helpers JSON (get/post/put/delete)
- mapeamento de erros HTTP para exceções tipadas (api_errors)
- logging estruturado sem API key, assinaturas ou corpos
"""

from __future__ import annotations

import json
import logging
from typing import Any

from api.connectors.kulipa.api_errors import parse_api_error
from api.connectors.kulipa.api_logging import log_api_error, log_success
from app.infra.http import HttpClient
from utils.errors import KulipaApiError

logger: logging.Logger = logging.getLogger(__name__)

JsonBody = dict[str, Any] | list[Any] | None


class KulipaHttpClient(HttpClient):
    """Cliente JSON para endpoints Kulipa.

    Respostas 2xx viram dict/list (ou None se o corpo for vazio);
    qualquer outro status vira a exceção de utils.errors correspondente.
    """

    async def get(self, path: str, params: dict[str, Any] | None = None) -> JsonBody:
        return await self._send_json("GET", path, params=params)

    async def post(
        self,
        path: str,
        payload: Any = None,
        idempotency_key: str | None = None,
    ) -> JsonBody:
        return await self._send_json("POST", path, json=payload, idempotency_key=idempotency_key)

    async def put(
        self,
        path: str,
        payload: Any = None,
        idempotency_key: str | None = None,
    ) -> JsonBody:
        return await self._send_json("PUT", path, json=payload, idempotency_key=idempotency_key)

    async def delete(self, path: str) -> JsonBody:
        return await self._send_json("DELETE", path)

    async def _send_json(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        idempotency_key: str | None = None,
    ) -> JsonBody:
        response = await self.request(
            method,
            path,
            json=json,
            params=params,
            idempotency_key=idempotency_key,
        )
        await response.aread()

        if not response.is_success:
            error = parse_api_error(response)
            log_api_error(error, method, path)
            raise error

        log_success(method, path, response.status_code)
        return self._decode_body(response.text, method, path, response.status_code)

    @staticmethod
    def _decode_body(text: str, method: str, path: str, status_code: int) -> JsonBody:
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("kulipa_invalid_json_response", extra={"method": method, "path": path})
            raise KulipaApiError("Response JSON inválido", status_code) from exc
