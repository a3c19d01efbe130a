"""Erros do cliente de email.

Taxonomia:
- CredentialError: access key inválida (fatal por envio, sem rede)
- TransportError: falha de conexão/timeout (o chamador decide retentar)
- APIError: resposta != 202 com erro estruturado do servidor
- DecodeError: corpo de resposta ilegível (nunca vira sucesso)
- MailSendCancelledError: email não tentado porque o lote foi cancelado
- MailBatchError: agregado de falhas de um lote, decomponível por tipo
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from app.infra.crypto.errors import CredentialError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .models import AdditionalInfo, ErrorDetail

E = TypeVar("E", bound=BaseException)


class EmailClientError(Exception):
    """Base para erros do cliente de email."""


class TransportError(EmailClientError):
    """Falha de rede ou timeout; causa original em ``__cause__``."""


class APIError(EmailClientError):
    """Erro retornado pela API.

    ``str(exc)`` é a mensagem de topo do servidor; a estrutura completa
    (details, additionalInfo) fica em ``exc.error``.
    """

    def __init__(self, error: ErrorDetail, status_code: int) -> None:
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def target(self) -> str | None:
        return self.error.target

    @property
    def details(self) -> list[ErrorDetail]:
        return self.error.details

    @property
    def additional_info(self) -> list[AdditionalInfo]:
        return self.error.additional_info


class DecodeError(EmailClientError):
    """Corpo de resposta não corresponde ao envelope esperado."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MailSendCancelledError(EmailClientError):
    """Email não enviado: lote cancelado antes de sua vez."""


@dataclass(frozen=True)
class MailSendFailure:
    """Falha de um email do lote, com sua posição na entrada."""

    index: int
    error: Exception


class MailBatchError(EmailClientError):
    """Agregado das falhas de um lote.

    Preserva cada erro original com o índice do email que o gerou.
    Iterar devolve MailSendFailure em ordem de índice.
    """

    def __init__(
        self,
        failures: Sequence[MailSendFailure],
        message_ids: Sequence[str | None],
        cancelled: bool = False,
    ) -> None:
        self.failures = tuple(sorted(failures, key=lambda failure: failure.index))
        self.message_ids = list(message_ids)
        self.cancelled = cancelled
        summary = f"{len(self.failures)} de {len(self.message_ids)} envios falharam"
        if cancelled:
            summary += " (lote cancelado)"
        super().__init__(summary)

    @property
    def errors(self) -> tuple[Exception, ...]:
        return tuple(failure.error for failure in self.failures)

    def contains(self, kind: type[BaseException]) -> bool:
        """True se algum erro do lote é instância de ``kind``."""
        return any(isinstance(failure.error, kind) for failure in self.failures)

    def failures_of(self, kind: type[E]) -> list[MailSendFailure]:
        """Falhas cujo erro é instância de ``kind``."""
        return [failure for failure in self.failures if isinstance(failure.error, kind)]

    def __iter__(self) -> Iterator[MailSendFailure]:
        return iter(self.failures)

    def __len__(self) -> int:
        return len(self.failures)


__all__ = [
    "APIError",
    "CredentialError",
    "DecodeError",
    "EmailClientError",
    "MailBatchError",
    "MailSendCancelledError",
    "MailSendFailure",
    "TransportError",
]
