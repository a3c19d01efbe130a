"""Envelopes de resposta da Email API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AdditionalInfo(BaseModel):
    """Informação adicional livre anexada a um erro."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = ""
    info: Any = None


class ErrorDetail(BaseModel):
    """Erro estruturado (recursivo) retornado pela API."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    code: str = ""
    message: str = ""
    target: str | None = None
    details: list[ErrorDetail] = Field(default_factory=list)
    additional_info: list[AdditionalInfo] = Field(
        default_factory=list, alias="additionalInfo"
    )

    @field_validator("code", "message", mode="before")
    @classmethod
    def _null_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("details", "additional_info", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SendMailResponse(BaseModel):
    """Envelope de sucesso (HTTP 202)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1)
    status: str | None = None
    error: ErrorDetail | None = None


class ErrorResponse(BaseModel):
    """Envelope de erro (qualquer status diferente de 202)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    error: ErrorDetail
