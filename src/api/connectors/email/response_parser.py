"""Decodificação das respostas do endpoint de envio.

Decide apenas pelo status HTTP: 202 é o envelope de sucesso, qualquer
outro status é o envelope de erro. Corpo que não encaixa no envelope
esperado vira DecodeError, nunca sucesso.
"""

from __future__ import annotations

from pydantic import ValidationError

from .errors import APIError, DecodeError
from .models import ErrorResponse, SendMailResponse

HTTP_ACCEPTED = 202

# Trecho máximo do corpo incluído em DecodeError
_BODY_EXCERPT_CHARS = 200


def parse_send_response(status_code: int, body: bytes) -> str:
    """Interpreta a resposta de um envio.

    Args:
        status_code: Status HTTP recebido
        body: Corpo bruto da resposta

    Returns:
        ID da mensagem gerado pela API (somente em 202)

    Raises:
        APIError: Status != 202 com envelope de erro válido
        DecodeError: Corpo inválido para o envelope esperado
    """
    if status_code == HTTP_ACCEPTED:
        return _parse_success(status_code, body).id

    envelope = _parse_error(status_code, body)
    raise APIError(envelope.error, status_code=status_code)


def _parse_success(status_code: int, body: bytes) -> SendMailResponse:
    try:
        return SendMailResponse.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(_decode_message("sucesso", body), status_code) from exc


def _parse_error(status_code: int, body: bytes) -> ErrorResponse:
    try:
        return ErrorResponse.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(_decode_message("erro", body), status_code) from exc


def _decode_message(kind: str, body: bytes) -> str:
    excerpt = body[:_BODY_EXCERPT_CHARS].decode("utf-8", errors="replace")
    return f"Envelope de {kind} inválido: {excerpt!r}"
