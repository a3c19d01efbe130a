"""Assinatura HMAC de requisições para a Email API.

Localizado em app/infra/ para manter boundaries corretas:
- app/ não importa de api/
- api/connectors/email usa este módulo para assinar cada envio
"""

from .errors import CredentialError
from .signature import (
    AUTH_SCHEME,
    SIGNED_HEADERS,
    SigningCredentials,
    build_string_to_sign,
    compute_content_hash,
    compute_signature,
    decode_access_key,
    format_http_date,
    sign_request,
)

__all__ = [
    "AUTH_SCHEME",
    "SIGNED_HEADERS",
    "CredentialError",
    "SigningCredentials",
    "build_string_to_sign",
    "compute_content_hash",
    "compute_signature",
    "decode_access_key",
    "format_http_date",
    "sign_request",
]
