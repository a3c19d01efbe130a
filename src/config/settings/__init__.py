"""Settings do cliente de email.

Carregadas de variáveis de ambiente (ACS_*); aqui apenas re-exporta.
"""

from __future__ import annotations

from config.settings.email import (
    ACS_EMAIL_API_VERSION,
    SEND_MAIL_PATH,
    EmailSettings,
    get_email_settings,
    parse_connection_string,
)

__all__ = [
    "ACS_EMAIL_API_VERSION",
    "SEND_MAIL_PATH",
    "EmailSettings",
    "get_email_settings",
    "parse_connection_string",
]
