"""Helpers de logging para API Kulipa (sem segredos nem corpos)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from utils.errors import KulipaApiError

logger = logging.getLogger(__name__)


def log_api_error(error: KulipaApiError, method: str, path: str) -> None:
    """Loga erro da API sem expor conteúdo da resposta."""
    logger.warning(
        "kulipa_api_error",
        extra={
            "method": method,
            "path": path,
            "status_code": error.status_code,
            "error_type": type(error).__name__,
            "request_id": error.request_id,
        },
    )


def log_success(method: str, path: str, status_code: int) -> None:
    logger.debug(
        "kulipa_api_success",
        extra={"method": method, "path": path, "status_code": status_code},
    )
