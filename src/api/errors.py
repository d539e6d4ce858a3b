"""Translate domain errors and framework errors into JSON responses.

This is the only place that picks HTTP status codes for failures. Every
error body is {"message": ...}; internal details stay in the server log.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.model.errors import (
    AuthError,
    ConflictError,
    DomainError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"

# Most specific first: InvalidCredentialsError must win over AuthError.
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InvalidCredentialsError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: DomainError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message(text: str, status_code: int, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": text}, headers=headers)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error("Request failed", extra={
            "path": request.url.path,
            "method": request.method,
            "error": exc.message,
        })
    else:
        logger.info("Request rejected", extra={
            "path": request.url.path,
            "status": status_code,
            "reason": exc.message,
        })

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    # InternalError messages are written to be client-safe; anything else at
    # 500 is a bare DomainError and gets the generic text.
    text = exc.message if status_code < 500 or isinstance(exc, InternalError) else GENERIC_SERVER_ERROR
    return _message(text, status_code, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Pydantic body errors become 400 naming the first offending field."""
    errors = exc.errors()
    text = "Invalid request body"
    # Unparseable JSON reports a character offset as its location
    if errors and errors[0].get("type") != "json_invalid":
        loc = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
        if loc:
            text = f"Invalid value for {loc[0]}"
    logger.info("Request validation failed", extra={"path": request.url.path, "reason": text})
    return _message(text, status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _message(str(exc.detail), exc.status_code, getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return _message(GENERIC_SERVER_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
