"""correlation_id dos envios de email.

Guardado em ContextVar: cada task asyncio criada dentro de um lote herda o
valor, então todos os logs do lote compartilham o mesmo ID.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("acs_mail_correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ("" se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id (gera um novo se None); devolve o token de reset."""
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um ID curto (12 hex) para um lote de envio."""
    return uuid.uuid4().hex[:12]


@contextmanager
def batch_correlation_scope() -> Iterator[str]:
    """Garante um correlation_id durante o bloco.

    Reaproveita o ID do chamador quando existe; caso contrário abre um novo
    e restaura o contexto ao sair.

    Uso:
        with batch_correlation_scope() as correlation_id:
            await dispatch_batch(...)
    """
    current = _correlation_id.get()
    if current:
        yield current
        return
    token = set_correlation_id()
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)
