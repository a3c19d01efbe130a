"""Despacho de lotes de email com pool limitado de workers.

Cada email é enviado de forma independente; uma falha nunca interrompe os
demais. Com ``max_concurrency=1`` o comportamento é sequencial.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import (
    CredentialError,
    EmailClientError,
    MailSendCancelledError,
    MailSendFailure,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from app.domain.mail import Mail


@dataclass(frozen=True)
class BatchOutcome:
    """Resultado bruto de um lote: um slot por email de entrada."""

    message_ids: list[str | None]
    failures: list[MailSendFailure]
    cancelled: bool


async def dispatch_batch(
    send_one: Callable[[Mail], Awaitable[str]],
    mails: Sequence[Mail],
    *,
    max_concurrency: int,
    cancel_event: asyncio.Event | None = None,
) -> BatchOutcome:
    """Envia todos os emails e coleta cada falha.

    Args:
        send_one: Envio unitário (EmailClient.send_mail)
        mails: Emails na ordem de entrada
        max_concurrency: Número máximo de envios simultâneos (>= 1)
        cancel_event: Quando setado, nenhum envio novo é iniciado; os em
            andamento terminam e os restantes recebem MailSendCancelledError

    Returns:
        BatchOutcome com IDs por posição e falhas indexadas
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency deve ser >= 1")

    message_ids: list[str | None] = [None] * len(mails)
    failures: list[MailSendFailure] = []
    pending = iter(enumerate(mails))

    async def worker() -> None:
        # Iterador compartilhado: cada next() roda sem await, então dois
        # workers nunca pegam o mesmo email.
        for index, mail in pending:
            if cancel_event is not None and cancel_event.is_set():
                failures.append(
                    MailSendFailure(index, MailSendCancelledError("lote cancelado"))
                )
                continue
            try:
                message_ids[index] = await send_one(mail)
            except (EmailClientError, CredentialError) as exc:
                failures.append(MailSendFailure(index, exc))

    workers = min(max_concurrency, len(mails))
    if workers:
        await asyncio.gather(*(worker() for _ in range(workers)))

    cancelled = any(isinstance(f.error, MailSendCancelledError) for f in failures)
    return BatchOutcome(message_ids=message_ids, failures=failures, cancelled=cancelled)
