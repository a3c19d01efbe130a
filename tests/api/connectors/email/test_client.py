"""Testes do EmailClient (envio unitário)."""

from __future__ import annotations

import base64
import hashlib
import json
from datetime import datetime, timezone

import httpx
import pytest

from api.connectors.email import (
    APIError,
    CredentialError,
    DecodeError,
    EmailClient,
    TransportError,
    create_email_client,
)
from app.domain.mail import Mail, MailAddress, MailContent, MailRecipients
from app.infra.crypto import (
    build_string_to_sign,
    compute_content_hash,
    compute_signature,
    decode_access_key,
)
from config.settings import EmailSettings
from tests.fakes.fake_mail_transport import FakeMailTransport, accepted, api_error

ENDPOINT = "https://contoso.communication.azure.com"
ACCESS_KEY = base64.b64encode(b"shared-secret").decode()
SENDER = "DoNotReply@contoso.com"
FIXED_TS = datetime(2026, 10, 19, 10, 0, 0, tzinfo=timezone.utc)


def make_client(transport: FakeMailTransport, access_key: str = ACCESS_KEY) -> EmailClient:
    return EmailClient(
        ENDPOINT,
        access_key,
        SENDER,
        transport=transport,
        clock=lambda: FIXED_TS,
    )


@pytest.fixture
def mail() -> Mail:
    return Mail(
        recipients=MailRecipients(to=[MailAddress(address="ana@example.com")]),
        content=MailContent(subject="Olá", plain_text="Tudo bem?"),
    )


class TestEmailClientInit:
    """Validação de construção."""

    def test_rejects_relative_endpoint(self) -> None:
        with pytest.raises(ValueError, match="endpoint"):
            EmailClient("contoso.communication.azure.com", ACCESS_KEY, SENDER)

    def test_rejects_empty_sender(self) -> None:
        with pytest.raises(ValueError, match="sender_address"):
            EmailClient(ENDPOINT, ACCESS_KEY, " ")

    def test_rejects_zero_concurrency(self) -> None:
        with pytest.raises(ValueError, match="max_concurrency"):
            EmailClient(ENDPOINT, ACCESS_KEY, SENDER, max_concurrency=0)

    def test_rejects_endpoint_with_userinfo(self) -> None:
        with pytest.raises(ValueError, match="credenciais"):
            EmailClient(
                "https://user@contoso.communication.azure.com", ACCESS_KEY, SENDER
            )

    def test_send_url(self) -> None:
        client = EmailClient(ENDPOINT + "/", ACCESS_KEY, SENDER, api_version="2024-07-01")
        assert client.send_url == f"{ENDPOINT}/emails:send?api-version=2024-07-01"


class TestSendMail:
    """Testes de send_mail."""

    @pytest.mark.asyncio
    async def test_accepted_returns_message_id(self, mail: Mail) -> None:
        transport = FakeMailTransport(
            httpx.Response(202, content=b'{"id":"abc123","error":{}}')
        )

        message_id = await make_client(transport).send_mail(mail)

        assert message_id == "abc123"
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_request_shape(self, mail: Mail) -> None:
        transport = FakeMailTransport(accepted())

        await make_client(transport).send_mail(mail)

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{ENDPOINT}/emails:send?api-version=2023-03-31"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["host"] == "contoso.communication.azure.com"
        assert request.headers["x-ms-date"] == "Mon, 19 Oct 2026 10:00:00 GMT"
        assert request.headers["authorization"].startswith(
            "HMAC-SHA256 SignedHeaders=x-ms-date;host;x-ms-content-sha256&Signature="
        )

    @pytest.mark.asyncio
    async def test_content_hash_matches_transmitted_bytes(self, mail: Mail) -> None:
        transport = FakeMailTransport(accepted())

        await make_client(transport).send_mail(mail)

        request = transport.requests[0]
        body = request.content
        expected = base64.b64encode(hashlib.sha256(body).digest()).decode()
        assert request.headers["x-ms-content-sha256"] == expected
        assert compute_content_hash(body) == expected

    @pytest.mark.asyncio
    async def test_body_is_wire_message(self, mail: Mail) -> None:
        transport = FakeMailTransport(accepted())

        await make_client(transport).send_mail(mail)

        payload = json.loads(transport.requests[0].content)
        assert payload["senderAddress"] == SENDER
        assert payload["userEngagementTrackingDisabled"] is True
        assert payload["recipients"]["to"] == [{"address": "ana@example.com"}]
        assert payload["content"]["subject"] == "Olá"

    @pytest.mark.asyncio
    async def test_same_instant_same_headers(self, mail: Mail) -> None:
        transport = FakeMailTransport(accepted())
        client = make_client(transport)

        await client.send_mail(mail)
        await client.send_mail(mail)

        first, second = transport.requests
        for header in ("x-ms-date", "x-ms-content-sha256", "authorization"):
            assert first.headers[header] == second.headers[header]

    @pytest.mark.asyncio
    async def test_api_error_surfaces_message(self, mail: Mail) -> None:
        transport = FakeMailTransport(api_error(400, "InvalidRecipient", "bad address"))

        with pytest.raises(APIError) as exc_info:
            await make_client(transport).send_mail(mail)

        assert str(exc_info.value) == "bad address"
        assert exc_info.value.code == "InvalidRecipient"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_json_on_202_is_decode_error(self, mail: Mail) -> None:
        transport = FakeMailTransport(httpx.Response(202, content=b"{not json"))

        with pytest.raises(DecodeError):
            await make_client(transport).send_mail(mail)

    @pytest.mark.asyncio
    async def test_malformed_json_on_error_is_decode_error(self, mail: Mail) -> None:
        transport = FakeMailTransport(httpx.Response(503, content=b"Service Unavailable"))

        with pytest.raises(DecodeError) as exc_info:
            await make_client(transport).send_mail(mail)
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
        ],
    )
    async def test_transport_failure_is_transport_error(
        self, mail: Mail, failure: httpx.RequestError
    ) -> None:
        transport = FakeMailTransport(failure)

        with pytest.raises(TransportError) as exc_info:
            await make_client(transport).send_mail(mail)

        assert exc_info.value.__cause__ is failure
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_bad_access_key_aborts_before_network(self, mail: Mail) -> None:
        transport = FakeMailTransport(accepted())

        with pytest.raises(CredentialError):
            await make_client(transport, access_key="not-base64!").send_mail(mail)

        assert transport.call_count == 0


class TestCreateEmailClient:
    """Testes da factory."""

    @pytest.mark.asyncio
    async def test_uses_settings(self, mail: Mail) -> None:
        settings = EmailSettings(
            endpoint=ENDPOINT,
            access_key=ACCESS_KEY,
            sender_address="outro@contoso.com",
            api_version="2024-07-01",
        )
        transport = FakeMailTransport(accepted("xyz"))

        client = create_email_client(settings, transport=transport)

        assert await client.send_mail(mail) == "xyz"
        assert client.sender_address == "outro@contoso.com"
        assert transport.requests[0].url.params["api-version"] == "2024-07-01"


def _expected_signature(request: httpx.Request) -> str:
    """Recalcula a assinatura a partir do que foi transmitido."""
    string_to_sign = build_string_to_sign(
        request.method,
        request.url.raw_path.decode("ascii"),
        request.headers["x-ms-date"],
        request.headers["host"],
        compute_content_hash(request.content),
    )
    return compute_signature(string_to_sign, decode_access_key(ACCESS_KEY))


class TestSignedTarget:
    """Host e path assinados são os mesmos enviados pela httpx."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("endpoint", "host", "path"),
        [
            (
                "https://contoso.communication.azure.com:443",
                "contoso.communication.azure.com",
                "/emails:send?api-version=2023-03-31",
            ),
            (
                "https://contoso.communication.azure.com/base",
                "contoso.communication.azure.com",
                "/base/emails:send?api-version=2023-03-31",
            ),
            (
                "https://contoso.communication.azure.com:8443",
                "contoso.communication.azure.com:8443",
                "/emails:send?api-version=2023-03-31",
            ),
        ],
    )
    async def test_signature_covers_transmitted_host_and_path(
        self, mail: Mail, endpoint: str, host: str, path: str
    ) -> None:
        transport = FakeMailTransport(accepted())
        client = EmailClient(
            endpoint, ACCESS_KEY, SENDER, transport=transport, clock=lambda: FIXED_TS
        )

        await client.send_mail(mail)

        request = transport.requests[0]
        assert request.headers["host"] == host
        assert request.url.raw_path.decode("ascii") == path
        signature = request.headers["authorization"].rsplit("Signature=", 1)[1]
        assert signature == _expected_signature(request)
