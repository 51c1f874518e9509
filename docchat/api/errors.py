"""
API error handling.

Maps the domain exception hierarchy onto HTTP responses with the
ErrorResponse body ``{success: false, error, details}``.

Dependencies: fastapi, docchat.core.exceptions
System role: Uniform error responses at the request boundary
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docchat.core.exceptions import (
    DocChatException,
    UpstreamError,
    ValidationError,
)
from docchat.models.common import ErrorResponse
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, details: dict | str | None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(
        "Invalid request",
        extra={"path": request.url.path, "error": exc.message},
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.details or None)


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    logger.warning("Request schema validation failed", extra={"path": request.url.path})
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request body",
        {"errors": jsonable_encoder(exc.errors())},
    )



async def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.error(
        "Upstream service failure",
        extra={"path": request.url.path, "error": exc.message},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.details or None)


async def handle_domain_error(request: Request, exc: DocChatException) -> JSONResponse:
    logger.error(
        "Request failed",
        extra={"path": request.url.path, "error": exc.message},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.details or None)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(logger, "Unexpected failure", exc, path=request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        str(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach domain exception handlers to the application."""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(UpstreamError, handle_upstream_error)
    app.add_exception_handler(DocChatException, handle_domain_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
