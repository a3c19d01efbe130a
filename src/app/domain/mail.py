"""Modelos de domínio de um email a enviar.

O chamador monta um Mail completo (builder, literal, config desserializada);
o cliente apenas lê. Aliases seguem os nomes de campo da Email API para que
``model_dump(by_alias=True)`` já produza o formato de wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MailAddress(BaseModel):
    """Endereço de email com nome de exibição opcional."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str = Field(..., min_length=1, description="Endereço de email.")
    display_name: str | None = Field(
        default=None,
        alias="displayName",
        description="Nome exibido ao destinatário.",
    )


class MailRecipients(BaseModel):
    """Destinatários do email."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: list[MailAddress] = Field(default_factory=list)
    cc: list[MailAddress] = Field(default_factory=list)
    bcc: list[MailAddress] = Field(default_factory=list)


class MailContent(BaseModel):
    """Assunto e corpos (texto puro e/ou HTML)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subject: str
    plain_text: str | None = Field(default=None, alias="plainText")
    html: str | None = None


class MailAttachment(BaseModel):
    """Anexo já codificado em base64."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    content_type: str = Field(..., alias="contentType")
    content_in_base64: str = Field(..., alias="contentInBase64")


class Mail(BaseModel):
    """Email descrito pelo chamador; o remetente vem da configuração do cliente."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recipients: MailRecipients
    content: MailContent
    attachments: list[MailAttachment] = Field(default_factory=list)
    reply_to: list[MailAddress] = Field(default_factory=list, alias="replyTo")
