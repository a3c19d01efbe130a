"""Filters de logging do cliente de email.

- CorrelationIdFilter: injeta correlation_id e service em cada record
- SensitiveDataFilter: mascara endereços de email e assinaturas HMAC que
  escapem para mensagens ou campos `extra`
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
SIGNATURE_PATTERN = re.compile(r"(Signature=)[A-Za-z0-9+/=]+")

EMAIL_MASK = "***@***"

# Atributos padrão de LogRecord; não são campos `extra`
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def mask_sensitive(text: str) -> str:
    """Substitui emails e valores de Signature= por máscaras."""
    text = EMAIL_PATTERN.sub(EMAIL_MASK, text)
    return SIGNATURE_PATTERN.sub(r"\1***", text)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        correlation_id vindo via `extra` tem precedência sobre o do contexto.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveDataFilter(logging.Filter):
    """Mascara PII e segredos antes da formatação.

    Os helpers de log do connector já evitam PII; este filter cobre logs de
    terceiros (httpx) e mensagens de exceção repassadas como texto.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = mask_sensitive(record.msg)
        for key, value in list(record.__dict__.items()):
            if key not in _RECORD_ATTRS and isinstance(value, str):
                setattr(record, key, mask_sensitive(value))
        return True
