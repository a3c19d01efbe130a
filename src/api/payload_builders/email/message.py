"""Builder do payload de envio (Wire Message) da Email API.

Mapeamento puro: Mail + remetente configurado -> dict JSON. Sem estado e
sem defaults globais escondidos.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.mail import Mail

# Política fixa: rastreamento de engajamento sempre desligado.
USER_ENGAGEMENT_TRACKING_DISABLED = True


def build_wire_message(mail: Mail, sender_address: str) -> dict[str, Any]:
    """Constrói o payload de envio.

    Recipients, content, attachments e replyTo são copiados como estão;
    o remetente é sempre o configurado no cliente.

    Args:
        mail: Email descrito pelo chamador
        sender_address: Remetente verificado do recurso

    Returns:
        Payload no formato da Email API
    """
    payload: dict[str, Any] = {
        "senderAddress": sender_address,
        "content": mail.content.model_dump(by_alias=True, exclude_none=True),
        "recipients": mail.recipients.model_dump(by_alias=True, exclude_none=True),
        "userEngagementTrackingDisabled": USER_ENGAGEMENT_TRACKING_DISABLED,
    }

    if mail.attachments:
        payload["attachments"] = [
            attachment.model_dump(by_alias=True) for attachment in mail.attachments
        ]
    if mail.reply_to:
        payload["replyTo"] = [
            address.model_dump(by_alias=True, exclude_none=True)
            for address in mail.reply_to
        ]

    return payload


def serialize_wire_message(payload: dict[str, Any]) -> bytes:
    """Serializa o payload em JSON compacto UTF-8.

    Estes são os bytes exatos assinados e transmitidos.
    """
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
