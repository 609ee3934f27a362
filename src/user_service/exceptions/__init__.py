# user_service/exceptions/
# ├── base.py                    # typed service errors (UserAlreadyExistsError, ...)
# ├── integrity_classifier.py    # which constraint an IntegrityError tripped
# └── mapper.py                  # DB errors -> service errors

from .base import (
    ServiceError,
    UserNotInsertedError,
    UserAlreadyExistsError,
    UserAlreadyDeletedError,
    DatabaseTransactionError,
)

__all__ = [
    "ServiceError",
    "UserNotInsertedError",
    "UserAlreadyExistsError",
    "UserAlreadyDeletedError",
    "DatabaseTransactionError",
]
