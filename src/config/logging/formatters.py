"""Formatters para logs do cliente de email.

JSON em produção (python-json-logger); texto simples para desenvolvimento
local quando LOG_FORMAT=text.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos presentes em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter(static_fields: dict[str, str] | None = None) -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Args:
        static_fields: Campos fixos adicionados a todo log (ex: api_version).

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,123",
            "level": "WARNING",
            "logger": "api.connectors.email.email_logging",
            "message": "email_api_error",
            "correlation_id": "5f0c...",
            "service": "acs_mail",
            "status_code": 400,
            "error_code": "InvalidRecipient"
        }
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        static_fields=dict(static_fields or {}),
    )


def create_text_formatter() -> logging.Formatter:
    """Formatter legível para terminal; campos `extra` não aparecem."""
    return logging.Formatter(TEXT_FORMAT)
