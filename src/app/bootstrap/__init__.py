"""Bootstrap — inicialização e wiring.

Composition root: configura logging, valida settings e conecta o
EmailClient ao transporte HTTP padrão.

Uso:
    from app.bootstrap import get_email_client, initialize_app

    initialize_app()
    client = get_email_client()
    message_id = await client.send_mail(mail)
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_email_settings

if TYPE_CHECKING:
    from api.connectors.email import EmailClient

SERVICE_NAME = "acs_mail"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging com correlation_id.

    Variáveis: LOG_LEVEL (padrão INFO) e LOG_FORMAT (json|text, padrão json).
    Todo log JSON carrega a api_version configurada.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    log_format = os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT)

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        log_format=log_format,
        static_fields={"api_version": get_email_settings().api_version},
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido; em `development` apenas alerta.

    Raises:
        RuntimeError: Settings inválidas em ambiente estrito.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = [f"email: {error}" for error in get_email_settings().validate()]

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


@lru_cache(maxsize=1)
def get_email_client() -> EmailClient:
    """Obtém o EmailClient configurado pelo ambiente (singleton)."""
    from api.connectors.email import create_email_client

    return create_email_client(get_email_settings())
