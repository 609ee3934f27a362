"""
Logging filters.

RequestIdFilter stamps every LogRecord with the id of the HTTP request being
served, read from a ContextVar so the value follows the request across
awaits. Records logged outside a request get the sentinel "-", which keeps
`%(request_id)s` format strings from raising.

RedactFilter masks sensitive values passed through `extra={...}`.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id for the current context.

    Returns:
        token: pass it to reset_request_id() to restore the previous value
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee a `request_id` attribute on every record.

    Precedence: an explicit `extra={"request_id": ...}`, then the context
    value set by RequestIDMiddleware, then "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
