"""
Request ID middleware.

Every request gets an id: the incoming `X-Request-ID` header when it is a
valid UUID, a fresh UUID4 otherwise. The id is stored in the request-id
ContextVar for the duration of the request (so RequestIdFilter stamps it on
every log record) and echoed back in the `X-Request-ID` response header.

Exceptions that escape the app are logged and answered with a generic 500
here, while the id is still set, so those responses carry the header too.
"""

import logging
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from .filters import set_request_id, reset_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def _valid_or_new(incoming: str | None) -> str:
    # Arbitrary header values would end up verbatim in the logs.
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        rid = _valid_or_new(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Unhandled error for %s %s", request.method, request.url.path)
                response = JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
