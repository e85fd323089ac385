"""Error Handlers: map every failure to the {code, message} envelope.

Invariants:
    - GifApiError → envelope for its ErrorKind
    - Framework 404/405 → NOT_FOUND / METHOD_NOT_ALLOWED envelopes
    - RequestValidationError → 404 NOT_FOUND (an unparseable path segment is an unmatched route)
    - Exception (catch-all) → 500 UNHANDLED_REJECTION, never leaks internal details
    - Body "code" always equals the response status
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gifapi.core.errors import ErrorKind, GifApiError, error_envelope, status_for

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gif_api_error_handler(app)
    _register_http_exception_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def kind_for_status(status_code: int) -> ErrorKind:
    """Collapse an arbitrary HTTP status onto the closed error taxonomy."""
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return ErrorKind.METHOD_NOT_ALLOWED
    if status_code < 500:
        return ErrorKind.NOT_FOUND
    return ErrorKind.UNHANDLED_REJECTION


def envelope_response(
    kind: ErrorKind, headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(kind),
        content=error_envelope(kind),
        headers=headers,
    )


def _register_gif_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(GifApiError)
    async def gif_api_error_handler(request: Request, exc: GifApiError):
        """Handle domain and infrastructure errors raised by handlers."""
        extra = {
            "error_kind": exc.kind.value,
            "path": request.url.path,
            "method": request.method,
        }
        if exc.http_status >= 500:
            logger.error(
                f"Unhandled rejection: {exc.message} {exc.detail}",
                extra=extra, exc_info=exc,
            )
        else:
            logger.info(f"{exc.kind.value}: {exc.message}", extra=extra)
        return envelope_response(exc.kind)


def _register_http_exception_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Handle routing-level rejections (unmatched path or method)."""
        kind = kind_for_status(exc.status_code)
        logger.info(
            f"{kind.value}: {request.method} {request.url.path}",
            extra={
                "error_kind": kind.value,
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        return envelope_response(kind, getattr(exc, "headers", None))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Rejected parameters on {request.url.path}: {exc.errors()}",
            extra={"error_kind": ErrorKind.NOT_FOUND.value, "path": request.url.path},
        )
        return envelope_response(ErrorKind.NOT_FOUND)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={
                "error_kind": ErrorKind.UNHANDLED_REJECTION.value,
                "path": request.url.path,
            },
            exc_info=True,
        )
        return envelope_response(ErrorKind.UNHANDLED_REJECTION)
