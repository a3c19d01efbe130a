"""Logging estruturado do cliente de email.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="acs_mail")
    logger = get_logger(__name__)

Campos de todo log JSON: asctime, level, logger, message, correlation_id,
service (mais os `extra` do evento).
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter, SensitiveDataFilter, mask_sensitive
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SensitiveDataFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
    "mask_sensitive",
]
