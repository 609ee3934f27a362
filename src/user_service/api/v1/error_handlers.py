"""
FastAPI exception handlers that turn typed errors into HTTP responses.

The status and body of a service error come from the exception itself
(`http_status()` / `to_payload()`); handlers here only choose a log level.
Register them all with `register_exception_handlers(app)`.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service.exceptions.base import (
    ServiceError,
    UserAlreadyDeletedError,
    UserAlreadyExistsError,
)
from user_service.core.logging.middleware import INTERNAL_ERROR_MESSAGE

logger = logging.getLogger(__name__)

MALFORMED_BODY = "MalformedBody"


def _format_loc(loc: tuple) -> str:
    # ("body", "userName") -> ".userName"; list positions render as [i]
    return "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in loc[1:])


def malformed_body_message(exc: RequestValidationError) -> str:
    """
    Describe the first validation failure, e.g.
    `Malformed request body failed to decode: .userName(String should not be empty)`.
    """
    errors = exc.errors()
    if not errors:
        return "Malformed request body failed to decode"
    first = errors[0]
    return f"Malformed request body failed to decode: {_format_loc(tuple(first.get('loc', ())))}({first.get('msg', '')})"


async def malformed_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    400 Bad Request for bodies that fail to decode or validate.
    """
    message = malformed_body_message(exc)
    logger.info("MalformedBody for %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"name": MALFORMED_BODY, "message": message})


async def already_deleted_handler(request: Request, exc: UserAlreadyDeletedError) -> JSONResponse:
    logger.info("UserAlreadyDeletedError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def already_exists_handler(request: Request, exc: UserAlreadyExistsError) -> JSONResponse:
    logger.info(
        "UserAlreadyExistsError for %s %s: user_name=%s constraint=%s",
        request.method,
        request.url.path,
        exc.user_name,
        exc.constraint,
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Fallback for the remaining service errors (not inserted, transaction failures).
    """
    logger.warning("%s for %s %s: %s", exc.name, request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    500 for anything outside the taxonomy. The body stays generic.

    RequestIDMiddleware answers these itself; this covers failures raised
    outside it.
    """
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, malformed_body_handler)
    app.add_exception_handler(UserAlreadyDeletedError, already_deleted_handler)
    app.add_exception_handler(UserAlreadyExistsError, already_exists_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
