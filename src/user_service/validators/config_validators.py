def to_uppercase(value: str | None) -> str | None:
    """
    Strip and upper-case a raw environment value, passing None through.
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Strip and lower-case a raw environment value, passing None through.
    """
    if value is None:
        return None
    return value.strip().lower()


def blank_to_none(value: str | None) -> str | None:
    """
    Treat an empty or whitespace-only environment value as unset.

    `DATABASE_URL_OVERRIDE=` in a .env file should behave like the variable
    not being there at all.
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value
