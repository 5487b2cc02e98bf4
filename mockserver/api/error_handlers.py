"""Shared FastAPI exception handlers."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from mockserver.core.config import Settings
from mockserver.core.exceptions import DomainError, InternalError
from mockserver.core.logging import APP_LOGGER_NAME
from mockserver.core.metrics import metrics, route_key
from mockserver.core.request_context import new_request_id, request_context

ROUTE_NOT_FOUND = "Rota não encontrada"
INVALID_BODY = "Corpo da requisição inválido"


def _record_failure(request: Request, logger: logging.Logger) -> None:
    metric_name = route_key(request.scope)
    metrics.record(metric_name, status_code=HTTP_500_INTERNAL_SERVER_ERROR, duration_ms=0)
    if metrics.should_alert(metric_name):
        logger.warning("Metric alert for %s (slow or error rate)", metric_name)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach global exception handlers to the FastAPI app."""

    logger = logging.getLogger(APP_LOGGER_NAME)

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        payload: dict[str, Any] = {"error": exc.detail, "code": exc.error_code}
        if exc.extra:
            payload["meta"] = exc.extra
        if exc.status_code >= 500:
            logger.error(
                "Request failed (%s %s): %s",
                request.method,
                request.url.path,
                exc.detail,
                exc_info=exc.__cause__ or exc,
            )
        else:
            logger.warning(
                "Request failed (%s %s): %s",
                request.method,
                request.url.path,
                exc.detail,
            )
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Validation error (%s %s): %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BODY, "detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # a known path under the wrong method is still an unknown route
        if exc.status_code in (HTTP_404_NOT_FOUND, HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=HTTP_404_NOT_FOUND,
                content={"error": ROUTE_NOT_FOUND, "path": request.url.path},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", None) or new_request_id()
        with request_context(request_id):
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            _record_failure(request, logger)
        content: dict[str, Any] = {"error": InternalError.default_detail}
        if settings.is_development:
            content["message"] = str(exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
            headers={"X-Request-ID": request_id},
        )
