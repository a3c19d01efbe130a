"""Connector Email — Azure Communication Services Email API.

Responsabilidades:
- EmailClient: envio unitário e em lote com requisições assinadas (HMAC)
- HttpxTransport: transporte HTTP padrão (timeout, sem retry)
- Envelopes de resposta e taxonomia de erros
"""

from .client import EmailClient, create_email_client
from .errors import (
    APIError,
    CredentialError,
    DecodeError,
    EmailClientError,
    MailBatchError,
    MailSendCancelledError,
    MailSendFailure,
    TransportError,
)
from .http_base import HttpClientConfig, HttpxTransport
from .models import AdditionalInfo, ErrorDetail, ErrorResponse, SendMailResponse

__all__ = [
    "APIError",
    "AdditionalInfo",
    "CredentialError",
    "DecodeError",
    "EmailClient",
    "EmailClientError",
    "ErrorDetail",
    "ErrorResponse",
    "HttpClientConfig",
    "HttpxTransport",
    "MailBatchError",
    "MailSendCancelledError",
    "MailSendFailure",
    "SendMailResponse",
    "TransportError",
    "create_email_client",
]
