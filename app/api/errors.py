"""
Boundary between services and HTTP.

`unwrap` turns a service `Result` into its value or an HTTPException; the
handlers below give every error response the `{statusCode, message}` shape.
"""

import logging
from typing import Any, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.result import Err, ErrorKind, Result
from app.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}

INTERNAL_ERROR_MESSAGE = "Internal server error."
TOO_MANY_REQUESTS_MESSAGE = "Too many requests. Please try again later."


def unwrap(result: Result[T]) -> T:
    """Return the success value, or raise the HTTPException matching the error kind."""
    if isinstance(result, Err):
        headers = None
        if result.kind is ErrorKind.UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        raise HTTPException(
            status_code=STATUS_BY_KIND[result.kind],
            detail=result.message,
            headers=headers,
        )
    return result.value


def envelope(status_code: int, message: str) -> dict[str, Any]:
    return {"statusCode": status_code, "message": message}


def error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI `responses` entry documenting error codes with the envelope body."""
    return {code: {"model": MessageResponse} for code in codes}


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # loc starts with "body"/"path"/"query"; the field path is what clients need
        loc = ".".join(str(p) for p in error.get("loc", ())[1:])
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(exc.status_code, message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope(
            status.HTTP_400_BAD_REQUEST,
            f"Validation failed: {_format_validation_errors(exc)}",
        ),
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Sync: SlowAPIMiddleware calls it directly, outside the exception middleware
    logger.warning(
        "Rate limit exceeded",
        extra={"path": request.url.path, "limit": str(exc.detail)},
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=envelope(status.HTTP_429_TOO_MANY_REQUESTS, TOO_MANY_REQUESTS_MESSAGE),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
