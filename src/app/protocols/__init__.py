"""Protocolos e contratos do core da aplicação."""

from .http_client import MailTransportProtocol

__all__ = [
    "MailTransportProtocol",
]
