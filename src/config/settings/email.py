"""Settings do canal Email via Azure Communication Services.

Credenciais podem vir de uma connection string única
(ACS_CONNECTION_STRING) ou de variáveis separadas (ACS_ENDPOINT +
ACS_ACCESS_KEY). A connection string tem precedência.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlsplit

# Versão GA da Email API
ACS_EMAIL_API_VERSION: str = "2023-03-31"
SEND_MAIL_PATH: str = "/emails:send"


@dataclass(frozen=True)
class EmailSettings:
    """Configurações do cliente de email.

    Attributes:
        endpoint: URL do recurso (ex: https://contoso.communication.azure.com)
        access_key: Chave compartilhada em base64 (usada no HMAC)
        sender_address: Remetente verificado (ex: DoNotReply@contoso.com)
        api_version: Versão da Email API
        request_timeout_seconds: Timeout por requisição HTTP
        max_concurrency: Envios simultâneos em um lote (1 = sequencial)
        verify_ssl: Validar certificado TLS
    """

    endpoint: str = ""
    access_key: str = ""
    sender_address: str = ""

    api_version: str = ACS_EMAIL_API_VERSION

    request_timeout_seconds: float = 30.0
    max_concurrency: int = 4
    verify_ssl: bool = True

    @property
    def send_path(self) -> str:
        """Path + query assinados no envio."""
        return f"{SEND_MAIL_PATH}?api-version={self.api_version}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Email.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.endpoint:
            errors.append("ACS_ENDPOINT não configurado")
        elif urlsplit(self.endpoint).scheme not in ("http", "https"):
            errors.append("ACS_ENDPOINT deve ser uma URL http(s)")

        if not self.access_key:
            errors.append("ACS_ACCESS_KEY não configurado")

        if not self.sender_address:
            errors.append("ACS_SENDER_ADDRESS não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("ACS_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_concurrency < 1:
            errors.append("ACS_MAX_CONCURRENCY deve ser >= 1")

        return errors


def parse_connection_string(connection_string: str) -> tuple[str, str]:
    """Extrai (endpoint, access_key) de uma connection string do ACS.

    Formato: ``endpoint=https://<recurso>.communication.azure.com/;accesskey=<base64>``.
    Nomes das chaves não diferenciam maiúsculas; a access key pode conter
    ``=`` (padding base64).

    Raises:
        ValueError: Se endpoint ou accesskey estiverem ausentes.
    """
    parts: dict[str, str] = {}
    for segment in connection_string.split(";"):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        if not sep:
            raise ValueError(f"Segmento inválido na connection string: {key!r}")
        parts[key.strip().lower()] = value.strip()

    endpoint = parts.get("endpoint", "")
    access_key = parts.get("accesskey", "")
    if not endpoint or not access_key:
        raise ValueError("Connection string deve conter endpoint e accesskey")
    return endpoint.rstrip("/"), access_key


def _load_from_env() -> EmailSettings:
    """Carrega EmailSettings de variáveis de ambiente."""
    endpoint = os.getenv("ACS_ENDPOINT", "")
    access_key = os.getenv("ACS_ACCESS_KEY", "")

    connection_string = os.getenv("ACS_CONNECTION_STRING", "")
    if connection_string:
        endpoint, access_key = parse_connection_string(connection_string)

    return EmailSettings(
        endpoint=endpoint.rstrip("/"),
        access_key=access_key,
        sender_address=os.getenv("ACS_SENDER_ADDRESS", ""),
        api_version=os.getenv("ACS_API_VERSION", ACS_EMAIL_API_VERSION),
        request_timeout_seconds=float(
            os.getenv("ACS_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_concurrency=int(os.getenv("ACS_MAX_CONCURRENCY", "4")),
        verify_ssl=os.getenv("ACS_VERIFY_SSL", "true").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Retorna instância cacheada de EmailSettings."""
    return _load_from_env()
