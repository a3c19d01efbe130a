"""Erros de assinatura de requisições.

Definido em app/infra para manter boundaries corretas; re-exportado por
api/connectors/email junto com os demais erros do cliente.
"""


class CredentialError(Exception):
    """Access key ausente ou impossível de decodificar (base64 inválido)."""
