"""
Classify a SQLAlchemy IntegrityError by the constraint kind that failed.

The result is an internal label only; `mapper.py` turns it into a typed
service error.
"""

import logging
from enum import Enum
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintViolation(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


SQLSTATE_VIOLATION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ConstraintViolation.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ConstraintViolation.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ConstraintViolation.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION.value: ConstraintViolation.CHECK,
}

# Message fragments for drivers without SQLSTATE (SQLite, MySQL). Checked in order.
_MESSAGE_KEYWORDS: list[tuple[ConstraintViolation, tuple[str, ...]]] = [
    (ConstraintViolation.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintViolation.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintViolation.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintViolation.CHECK, ("check constraint", "check failed")),
]


def _sqlstate(orig) -> str | None:
    # psycopg 3 exposes `sqlstate`, psycopg2 and SQLAlchemy's asyncpg adapter expose `pgcode`
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        return getattr(diag, "constraint_name", None)
    # asyncpg keeps the driver exception as the cause of the adapted one
    return getattr(getattr(orig, "__cause__", None), "constraint_name", None)


def _classify_from_sqlstate(orig) -> tuple[ConstraintViolation | None, str | None]:
    code = _sqlstate(orig)
    if not code:
        return None, None

    constraint_name = _constraint_name(orig)
    violation = SQLSTATE_VIOLATION_MAP.get(code)
    if violation is not None:
        logger.debug("Integrity diagnostic", extra={"sqlstate": code, "constraint_name": constraint_name})
        return violation, constraint_name

    logger.warning(
        "Unknown integrity error code encountered",
        extra={"sqlstate": code, "constraint_name": constraint_name},
    )
    return ConstraintViolation.UNKNOWN, constraint_name


def _classify_from_message(msg: str) -> ConstraintViolation:
    normalized = (msg or "").lower()
    for violation, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return violation

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return ConstraintViolation.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintViolation, str | None]:
    """
    Return (violation kind, constraint name if the driver reported one).

    SQLSTATE is preferred; message parsing is the fallback.
    """
    orig = exc.orig

    violation, constraint_name = _classify_from_sqlstate(orig)
    if violation is not None:
        return violation, constraint_name

    return _classify_from_message(str(orig) if orig is not None else str(exc)), None
