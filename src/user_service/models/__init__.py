"""
ORM models, importable from one place:

    from user_service.models import UserRow
"""

from .user import UserRow

__all__ = [
    "UserRow",
]
