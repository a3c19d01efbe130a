"""Assinatura HMAC-SHA256 de requisições para Azure Communication Services.

O servidor recalcula a mesma string-to-sign a partir da requisição
recebida e rejeita qualquer divergência. Ordem dos campos e delimitadores
fazem parte do protocolo:

    METHOD\\n
    /path?query\\n
    <x-ms-date>;<host>;<x-ms-content-sha256>

Headers gerados:
- x-ms-date: data HTTP (RFC 1123, UTC)
- x-ms-content-sha256: base64(SHA-256(body))
- Authorization: HMAC-SHA256 SignedHeaders=...&Signature=<base64>
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime

from .errors import CredentialError

AUTH_SCHEME = "HMAC-SHA256"
SIGNED_HEADERS = ("x-ms-date", "host", "x-ms-content-sha256")

DATE_HEADER = "x-ms-date"
CONTENT_HASH_HEADER = "x-ms-content-sha256"
AUTHORIZATION_HEADER = "Authorization"


@dataclass(frozen=True)
class SigningCredentials:
    """Credenciais estáticas de assinatura.

    Attributes:
        host: Valor do header Host (authority do endpoint)
        access_key: Chave compartilhada em base64
    """

    host: str
    access_key: str

    def __repr__(self) -> str:
        return f"SigningCredentials(host={self.host!r}, access_key='***')"


def decode_access_key(access_key: str) -> bytes:
    """Decodifica a access key base64.

    Raises:
        CredentialError: Se a chave estiver vazia ou não for base64 válido.
    """
    if not access_key or not access_key.strip():
        raise CredentialError("access_key é obrigatória para assinar requisições")
    try:
        return base64.b64decode(access_key.strip(), validate=True)
    except (ValueError, binascii.Error) as exc:
        raise CredentialError(f"access_key inválida: {exc}") from exc


def compute_content_hash(body: bytes) -> str:
    """base64(SHA-256(body)). Body vazio gera o hash de zero bytes."""
    return base64.b64encode(hashlib.sha256(body).digest()).decode("ascii")


def format_http_date(timestamp: datetime) -> str:
    """Formata timestamp como data HTTP em UTC.

    Datetimes sem timezone são tratados como UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return format_datetime(timestamp.astimezone(timezone.utc), usegmt=True)


def build_string_to_sign(
    method: str,
    path_and_query: str,
    date: str,
    host: str,
    content_hash: str,
) -> str:
    """Monta a string canônica assinada."""
    signed_values = ";".join((date, host.lower(), content_hash))
    return "\n".join((method.upper(), path_and_query, signed_values))


def compute_signature(string_to_sign: str, key: bytes) -> str:
    """HMAC-SHA256 da string canônica (UTF-8), em base64."""
    digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(
    method: str,
    path_and_query: str,
    body: bytes,
    timestamp: datetime,
    credentials: SigningCredentials,
) -> dict[str, str]:
    """Gera os headers de autenticação de uma requisição.

    Função pura: mesmas entradas (incluindo timestamp) geram os mesmos headers.

    Args:
        method: Método HTTP (ex: POST)
        path_and_query: Path + query string exatamente como enviados
        body: Bytes exatos do corpo transmitido
        timestamp: Instante da assinatura
        credentials: Host e access key

    Returns:
        Headers x-ms-date, x-ms-content-sha256 e Authorization

    Raises:
        CredentialError: Se a access key não puder ser decodificada.
    """
    key = decode_access_key(credentials.access_key)

    date = format_http_date(timestamp)
    content_hash = compute_content_hash(body)
    string_to_sign = build_string_to_sign(
        method, path_and_query, date, credentials.host, content_hash
    )
    signature = compute_signature(string_to_sign, key)

    return {
        DATE_HEADER: date,
        CONTENT_HASH_HEADER: content_hash,
        AUTHORIZATION_HEADER: (
            f"{AUTH_SCHEME} SignedHeaders={';'.join(SIGNED_HEADERS)}"
            f"&Signature={signature}"
        ),
    }
