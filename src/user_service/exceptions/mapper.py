import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .integrity_classifier import classify_integrity_error, ConstraintViolation
from .base import ServiceError, UserAlreadyExistsError, DatabaseTransactionError

logger = logging.getLogger(__name__)

TRANSACTION_ERROR_MESSAGE = "transaction error"


def raise_mapped_integrity_error(exc: IntegrityError, operation: str, user_name: str | None = None) -> None:
    """
    Map a SQLAlchemy IntegrityError to a typed service error and raise it.

    Only unique violations have a dedicated error; every other constraint
    failure is a transaction error. The raw DB message stays at DEBUG.
    """
    violation, constraint_name = classify_integrity_error(exc)

    if violation is ConstraintViolation.UNIQUE:
        # Duplicates are an expected client scenario (409), so INFO not WARNING
        logger.info(
            "mapper.duplicate_detected",
            extra={"operation": operation, "user_name": user_name, "constraint": constraint_name},
        )
        message = f"user {user_name} already exists" if user_name else "user already exists"
        raise UserAlreadyExistsError(message, user_name=user_name, constraint=constraint_name) from exc

    logger.warning(
        "mapper.integrity_violation",
        extra={"operation": operation, "violation": violation.value, "constraint": constraint_name},
    )
    logger.debug("mapper.integrity_raw", extra={"operation": operation, "raw": str(exc.orig)})
    raise DatabaseTransactionError(TRANSACTION_ERROR_MESSAGE) from exc


@asynccontextmanager
async def db_error_handler(operation: str, user_name: str | None = None):
    """
    Translate database failures raised inside the block into service errors.

    Usage:
        async with db_error_handler("insert_user", user.user_name):
            ... DB work, including the commit ...

    Typed service errors pass through untouched. Rollback is the job of the
    transaction the block wraps; this only re-types what escapes it.
    """
    try:
        yield
    except ServiceError:
        raise
    except IntegrityError as exc:
        raise_mapped_integrity_error(exc, operation, user_name)
    except SQLAlchemyError as exc:
        logger.exception("Database transaction failed", extra={"operation": operation})
        raise DatabaseTransactionError(TRANSACTION_ERROR_MESSAGE) from exc
