"""Transporte HTTP padrão do cliente de email (httpx).

Sem retry nem backoff: cada requisição é executada uma vez, com timeout.
Falhas de rede sobem como httpx.RequestError para o EmailClient traduzir.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuração do transporte HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpxTransport:
    """Executa requisições assinadas via httpx.AsyncClient.

    O AsyncClient é criado sob demanda e reutilizado entre envios;
    feche com ``aclose()`` ao terminar.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                verify=self._config.verify_ssl,
            )
        return self._client

    async def execute(self, request: httpx.Request) -> httpx.Response:
        """Envia a requisição e lê o corpo completo."""
        for name, value in self._config.default_headers.items():
            request.headers.setdefault(name, value)
        timeout = httpx.Timeout(self._config.timeout_seconds)
        request.extensions["timeout"] = timeout.as_dict()
        return await self._get_client().send(request)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
