"""
Typed errors raised by the program layer and translated into HTTP responses
by the handlers in `user_service.api.v1.error_handlers`.
"""


class ServiceError(Exception):
    """
    Base exception for program/service errors.

    - message: human-friendly message (safe to show to clients)
    - error_code: canonical short code used to pick the HTTP status
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_inserted": 500,
        "already_exists": 409,
        "already_deleted": 400,
        "transaction": 500,
        # fallback: anything else is a server-side failure
    }

    error_code: str | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.message} (code: {self.error_code})"
        return self.message

    def to_payload(self) -> dict:
        """
        JSON body for the HTTP response: {"message": "..."}.
        Never carries raw database text; callers chain the original exception instead.
        """
        return {"message": self.message}

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class UserNotInsertedError(ServiceError):
    """The insert statement ran but did not write exactly one row."""
    error_code = "not_inserted"


class UserAlreadyExistsError(ServiceError):
    """A user with the same user_name is already stored."""
    error_code = "already_exists"

    def __init__(self, message: str, *, user_name: str | None = None, constraint: str | None = None):
        super().__init__(message)
        self.user_name = user_name
        # Constraint name is for logs only, it never reaches the payload.
        self.constraint = constraint


class UserAlreadyDeletedError(ServiceError):
    """Delete matched no rows: the user is gone (or never existed)."""
    error_code = "already_deleted"


class DatabaseTransactionError(ServiceError):
    """Any other failure inside the transaction boundary."""
    error_code = "transaction"


__all__ = [
    "ServiceError",
    "UserNotInsertedError",
    "UserAlreadyExistsError",
    "UserAlreadyDeletedError",
    "DatabaseTransactionError",
]
