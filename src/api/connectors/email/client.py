"""Cliente da Email API do Azure Communication Services.

Fluxo de um envio:
1. Mail -> Wire Message (payload_builders/email)
2. Serializa, assina (app/infra/crypto) e monta httpx.Request
3. Executa no transporte injetado
4. Decodifica: 202 -> message id; outro status -> APIError

Sem retry: TransportError e APIError sobem para o chamador decidir.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import httpx

from api.connectors.email.batch import dispatch_batch
from api.connectors.email.email_logging import (
    log_api_error,
    log_batch_summary,
    log_decode_error,
    log_send_accepted,
    log_transport_error,
)
from api.connectors.email.errors import (
    APIError,
    DecodeError,
    MailBatchError,
    TransportError,
)
from api.connectors.email.http_base import HttpClientConfig, HttpxTransport
from api.connectors.email.response_parser import parse_send_response
from api.payload_builders.email import build_wire_message, serialize_wire_message
from app.infra.crypto import SigningCredentials, sign_request
from app.observability import batch_correlation_scope
from config.settings.email import ACS_EMAIL_API_VERSION, SEND_MAIL_PATH, get_email_settings

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable

    from app.domain.mail import Mail
    from app.protocols import MailTransportProtocol
    from config.settings.email import EmailSettings


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EmailClient:
    """Dispatcher de emails.

    Configuração (endpoint, access key, remetente) é imutável após a
    construção; a instância pode ser compartilhada entre envios concorrentes.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        sender_address: str,
        *,
        api_version: str = ACS_EMAIL_API_VERSION,
        transport: MailTransportProtocol | None = None,
        http_config: HttpClientConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        max_concurrency: int = 4,
    ) -> None:
        """Inicializa o cliente.

        Args:
            endpoint: URL do recurso ACS
            access_key: Chave compartilhada em base64 (decodificada a cada envio)
            sender_address: Remetente verificado
            api_version: Versão da Email API
            transport: Transporte HTTP injetado (fechado pelo chamador)
            http_config: Config do HttpxTransport criado quando transport é None
            clock: Fonte do timestamp assinado; padrão agora em UTC
            max_concurrency: Envios simultâneos em send_mails

        Raises:
            ValueError: Se endpoint, sender_address ou max_concurrency inválidos
        """
        parts = urlsplit(endpoint)
        if not parts.scheme or not parts.hostname:
            raise ValueError(
                "endpoint deve ser uma URL absoluta "
                "(ex: https://<recurso>.communication.azure.com)"
            )
        if parts.username is not None or parts.password is not None:
            raise ValueError("endpoint não deve conter credenciais (user@host)")
        if not sender_address or not sender_address.strip():
            raise ValueError("sender_address é obrigatório")
        if max_concurrency < 1:
            raise ValueError("max_concurrency deve ser >= 1")

        self._endpoint = endpoint.rstrip("/")
        self._sender_address = sender_address
        self._path = f"{SEND_MAIL_PATH}?api-version={api_version}"
        self._access_key = access_key
        self._owns_transport = transport is None
        self._transport: MailTransportProtocol = transport or HttpxTransport(http_config)
        self._clock = clock or _utc_now
        self._max_concurrency = max_concurrency

    @property
    def sender_address(self) -> str:
        return self._sender_address

    @property
    def send_url(self) -> str:
        return f"{self._endpoint}{self._path}"

    def build_signed_request(self, body: bytes) -> httpx.Request:
        """Monta o POST assinado para os bytes exatos do corpo.

        Host e path+query assinados saem da própria httpx.Request, ou seja,
        os valores transmitidos (porta padrão omitida, base path incluído).

        Raises:
            CredentialError: Access key inválida (antes de qualquer IO)
        """
        request = httpx.Request(
            "POST",
            self.send_url,
            headers={"Content-Type": "application/json"},
            content=body,
        )
        credentials = SigningCredentials(
            host=request.headers["host"],
            access_key=self._access_key,
        )
        request.headers.update(
            sign_request(
                "POST",
                request.url.raw_path.decode("ascii"),
                body,
                self._clock(),
                credentials,
            )
        )
        return request

    async def send_mail(self, mail: Mail) -> str:
        """Envia um email e retorna o message id gerado pela API.

        Raises:
            CredentialError: Access key inválida; nada é enviado
            TransportError: Falha de conexão ou timeout
            APIError: Resposta diferente de 202
            DecodeError: Resposta ilegível
        """
        body = serialize_wire_message(build_wire_message(mail, self._sender_address))
        request = self.build_signed_request(body)

        started = time.perf_counter()
        try:
            response = await self._transport.execute(request)
        except httpx.RequestError as exc:
            log_transport_error(exc, self._path)
            raise TransportError(f"Falha de transporte: {type(exc).__name__}") from exc

        try:
            message_id = parse_send_response(response.status_code, response.content)
        except APIError as exc:
            log_api_error(exc, self._path)
            raise
        except DecodeError as exc:
            log_decode_error(exc, self._path)
            raise

        log_send_accepted(
            self._path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return message_id

    async def send_mails(
        self,
        *mails: Mail,
        cancel_event: asyncio.Event | None = None,
    ) -> list[str]:
        """Envia vários emails; falhas não interrompem os demais.

        Returns:
            Message ids na ordem de entrada (lista vazia se nenhum email)

        Raises:
            MailBatchError: Se ao menos um envio falhou; contém cada erro
                individual com o índice do email e os ids dos que passaram
        """
        if not mails:
            return []

        with batch_correlation_scope():
            outcome = await dispatch_batch(
                self.send_mail,
                mails,
                max_concurrency=self._max_concurrency,
                cancel_event=cancel_event,
            )
            log_batch_summary(len(mails), len(outcome.failures), outcome.cancelled)

        if outcome.failures:
            raise MailBatchError(
                outcome.failures,
                outcome.message_ids,
                cancelled=outcome.cancelled,
            )
        return [message_id for message_id in outcome.message_ids if message_id is not None]

    async def aclose(self) -> None:
        """Fecha o transporte padrão (transportes injetados são do chamador)."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> EmailClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_email_client(
    settings: EmailSettings | None = None,
    transport: MailTransportProtocol | None = None,
) -> EmailClient:
    """Factory para criar EmailClient a partir de EmailSettings.

    Args:
        settings: EmailSettings opcional. Se None, carrega do ambiente.
        transport: Transporte opcional; padrão HttpxTransport com timeout
            e verify_ssl das settings.

    Returns:
        Cliente configurado.
    """
    email = settings or get_email_settings()
    return EmailClient(
        email.endpoint,
        email.access_key,
        email.sender_address,
        api_version=email.api_version,
        transport=transport,
        http_config=HttpClientConfig(
            timeout_seconds=email.request_timeout_seconds,
            verify_ssl=email.verify_ssl,
        ),
        max_concurrency=email.max_concurrency,
    )
