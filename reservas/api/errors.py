"""Exception handlers for the FastAPI application.

Services raise domain exceptions; these handlers translate them into
HTTP responses with a ``{"error": "<message>"}`` body.

Mapping:
    ValidacionError / malformed request -> 400
    NoEncontradoError                   -> 404
    ConflictoError                      -> 409
    anything else                       -> 500
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..domain.exceptions import ConflictoError, NoEncontradoError, ValidacionError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (ValidacionError, status.HTTP_400_BAD_REQUEST),
    (NoEncontradoError, status.HTTP_404_NOT_FOUND),
    (ConflictoError, status.HTTP_409_CONFLICT),
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert a domain exception to its HTTP status."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return error_response(status_code, str(exc))
    return await generic_exception_handler(request, exc)


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report unparseable bodies and query strings as 400 with a readable message."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in errors
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        f"Petición inválida: {details}" if details else "Petición inválida",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all so unexpected failures still answer with the error body."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error interno del servidor")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    for error_type, _ in _STATUS_BY_ERROR:
        app.add_exception_handler(error_type, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
