"""Common exception helpers for the HTTP layer."""
from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base exception for application specific errors."""

    status_code = 500
    error_code = "app_error"
    default_detail = "Erro interno do servidor"

    def __init__(self, detail: str | None = None, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail
        self.extra = extra or {}


class DomainError(AppError):
    """Normalized domain error surfaced to API handlers."""


class BadRequestError(DomainError):
    status_code = 400
    error_code = "invalid_input"
    default_detail = "Username inválido ou não fornecido"


class NotFoundError(DomainError):
    status_code = 404
    error_code = "not_found"
    default_detail = "Jogador não encontrado"


class ConflictError(DomainError):
    status_code = 409
    error_code = "already_present"
    default_detail = "Jogador já conectado"


class ServiceUnavailableError(DomainError):
    status_code = 503
    error_code = "capacity"
    default_detail = "Servidor cheio"


class InternalError(DomainError):
    status_code = 500
    error_code = "internal_error"
    default_detail = "Erro interno do servidor"
