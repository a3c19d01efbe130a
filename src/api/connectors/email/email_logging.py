"""Helpers de logging para a Email API (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import APIError, DecodeError

logger = logging.getLogger(__name__)


def log_send_accepted(endpoint: str, status_code: int, elapsed_ms: float) -> None:
    """Loga envio aceito (202)."""
    logger.debug(
        "email_send_accepted",
        extra={
            "method": "POST",
            "endpoint": endpoint,
            "status_code": status_code,
            "elapsed_ms": round(elapsed_ms, 1),
        },
    )


def log_api_error(error: APIError, endpoint: str) -> None:
    """Loga erro estruturado da API sem a mensagem (pode citar endereços)."""
    logger.warning(
        "email_api_error",
        extra={
            "method": "POST",
            "endpoint": endpoint,
            "status_code": error.status_code,
            "error_code": error.code,
            "detail_count": len(error.details),
        },
    )


def log_decode_error(error: DecodeError, endpoint: str) -> None:
    logger.error(
        "email_response_decode_error",
        extra={
            "method": "POST",
            "endpoint": endpoint,
            "status_code": error.status_code,
        },
    )


def log_transport_error(cause: Exception, endpoint: str) -> None:
    """Loga falha de rede/timeout pelo tipo da exceção original."""
    logger.warning(
        "email_transport_error",
        extra={
            "method": "POST",
            "endpoint": endpoint,
            "error_type": type(cause).__name__,
        },
    )


def log_batch_summary(total: int, failed: int, cancelled: bool) -> None:
    level = logging.WARNING if failed else logging.INFO
    logger.log(
        level,
        "email_batch_completed",
        extra={
            "total": total,
            "failed": failed,
            "succeeded": total - failed,
            "cancelled": cancelled,
        },
    )
