"""Protocolos HTTP usados pelo cliente de email.

Evita dependência direta de um cliente HTTP global: o transporte é injetado
no EmailClient (HttpxTransport em produção, fakes nos testes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import httpx


class MailTransportProtocol(Protocol):
    """Contrato mínimo: executar uma requisição já assinada.

    Implementações devem respeitar um timeout por requisição e deixar
    falhas de rede subirem como ``httpx.RequestError``.
    """

    async def execute(self, request: httpx.Request) -> httpx.Response: ...
