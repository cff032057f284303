"""Response envelope and exception handlers.

Every response body is either ``{"ok": true, "data": ...}`` or
``{"ok": false, "kind": ..., "message": ...}``.
"""

from typing import Generic, TypeVar

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from bazaar.domain.error import DomainError, ErrorKind
from bazaar.interface.error import AuthenticationRequiredError

T = TypeVar("T")

UNAUTHENTICATED = "Unauthenticated"

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.FORBIDDEN_SELF_VOTE: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_OPERATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_KIND_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.INVALID_OPERATION.value,
    status.HTTP_401_UNAUTHORIZED: UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN.value,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND.value,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorKind.INVALID_OPERATION.value,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT.value,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ErrorKind.VALIDATION_ERROR.value,
}


class Envelope(BaseModel, Generic[T]):
    """Successful response body."""

    ok: bool = True
    data: T


class ErrorEnvelope(BaseModel):
    """Failed response body."""

    ok: bool = False
    kind: str
    message: str


def envelope(data: T) -> Envelope[T]:
    """Wrap a use case result in the success envelope."""
    return Envelope[T](data=data)


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(kind=kind, message=message).model_dump(),
    )


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, DomainError)
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    logfire.warn(
        "Domain error",
        kind=exc.kind.value,
        error=exc.message,
        path=request.url.path,
    )
    return error_response(status_code, exc.kind.value, exc.message)


async def authentication_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    assert isinstance(exc, AuthenticationRequiredError)
    return error_response(
        status.HTTP_401_UNAUTHORIZED, UNAUTHENTICATED, exc.message
    )


async def request_validation_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    details = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        details.append(f"{location}: {item.get('msg')}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorKind.VALIDATION_ERROR.value,
        "; ".join(details) or "Invalid request",
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    kind = _KIND_BY_STATUS.get(exc.status_code, ErrorKind.INTERNAL_ERROR.value)
    return error_response(exc.status_code, kind, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        error=str(exc),
        _exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorKind.INTERNAL_ERROR.value,
        "Internal server error",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers on ``app``."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(AuthenticationRequiredError, authentication_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
