"""Logs do connector de email: eventos esperados e sem PII."""

from __future__ import annotations

import base64
import logging

import httpx
import pytest

from api.connectors.email import APIError, EmailClient, MailBatchError, TransportError
from app.domain.mail import Mail, MailAddress, MailContent, MailRecipients
from tests.fakes.fake_mail_transport import FakeMailTransport, accepted, api_error

ACCESS_KEY = base64.b64encode(b"shared-secret").decode()
RECIPIENT = "ana.secreta@example.com"


def make_client(transport: FakeMailTransport) -> EmailClient:
    return EmailClient(
        "https://contoso.communication.azure.com",
        ACCESS_KEY,
        "DoNotReply@contoso.com",
        transport=transport,
    )


def make_mail() -> Mail:
    return Mail(
        recipients=MailRecipients(to=[MailAddress(address=RECIPIENT)]),
        content=MailContent(subject="Assunto privado", plain_text="corpo"),
    )


def _assert_no_pii(records: list[logging.LogRecord]) -> None:
    for record in records:
        dumped = f"{record.getMessage()} {record.__dict__}"
        assert RECIPIENT not in dumped
        assert ACCESS_KEY not in dumped
        assert "Assunto privado" not in dumped


@pytest.mark.asyncio
async def test_api_error_logged_with_code(caplog: pytest.LogCaptureFixture) -> None:
    transport = FakeMailTransport(api_error(400, "InvalidRecipient", f"bad {RECIPIENT}"))

    with caplog.at_level(logging.DEBUG), pytest.raises(APIError):
        await make_client(transport).send_mail(make_mail())

    records = [r for r in caplog.records if r.getMessage() == "email_api_error"]
    assert len(records) == 1
    assert records[0].error_code == "InvalidRecipient"
    assert records[0].status_code == 400
    _assert_no_pii(caplog.records)


@pytest.mark.asyncio
async def test_transport_error_logged_with_type(caplog: pytest.LogCaptureFixture) -> None:
    transport = FakeMailTransport(httpx.ConnectTimeout("timeout"))

    with caplog.at_level(logging.DEBUG), pytest.raises(TransportError):
        await make_client(transport).send_mail(make_mail())

    records = [r for r in caplog.records if r.getMessage() == "email_transport_error"]
    assert records[0].error_type == "ConnectTimeout"
    _assert_no_pii(caplog.records)


@pytest.mark.asyncio
async def test_batch_summary_logged(caplog: pytest.LogCaptureFixture) -> None:
    transport = FakeMailTransport(accepted(), api_error(500, "Internal", "boom"))

    with caplog.at_level(logging.DEBUG), pytest.raises(MailBatchError):
        await make_client(transport).send_mails(make_mail(), make_mail())

    summary = [r for r in caplog.records if r.getMessage() == "email_batch_completed"]
    assert summary[0].total == 2
    assert summary[0].failed == 1
    assert summary[0].levelno == logging.WARNING
    assert any(r.getMessage() == "email_send_accepted" for r in caplog.records)
    _assert_no_pii(caplog.records)
