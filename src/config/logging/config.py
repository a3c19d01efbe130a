"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do processo (app/bootstrap/)
    configure_logging(level="INFO", service_name="acs_mail")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("email_send_accepted", extra={"status_code": 202})

Logs sem PII: nunca registrar endereços, corpo do email ou a access key.
O SensitiveDataFilter instalado no handler mascara o que escapar.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveDataFilter
from config.logging.formatters import create_json_formatter, create_text_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"json", "text"})

DEFAULT_SERVICE_NAME = "acs_mail"

# httpx registra cada requisição (URL completa) em INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    log_format: str = "json",
    static_fields: dict[str, str] | None = None,
) -> None:
    """Configura o logging do processo (handler único no root logger).

    Deve ser chamada uma vez na inicialização (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: app.observability.get_correlation_id).
        log_format: "json" (padrão) ou "text".
        static_fields: Campos fixos do formatter JSON.

    Raises:
        ValueError: Se o nível ou o formato de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    format_lower = log_format.lower()
    if format_lower not in VALID_LOG_FORMATS:
        raise ValueError(
            f"Formato de log inválido: {log_format}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_FORMATS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    if format_lower == "json":
        handler.setFormatter(create_json_formatter(static_fields))
    else:
        handler.setFormatter(create_text_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    noisy_level = max(logging.WARNING, root.level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)
